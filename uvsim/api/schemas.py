"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a presentation layer and the
engine. Rule violations are not HTTP errors: action responses carry
success=false with an error_code, so the client can show why an action
did not happen.

Error Codes:
- GAME_NOT_FOUND: Session does not exist or has ended
- RULE_VIOLATION: Wrong phase, wrong zone, nothing to act on
- CARD_NOT_FOUND: Card id not in the zone the action reads from
- INSUFFICIENT_RESOURCES: Not enough uncommitted foundations
- INVALID_REQUEST: Request cannot be applied to this game
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    RULE_VIOLATION = "RULE_VIOLATION"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"
    INVALID_REQUEST = "INVALID_REQUEST"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    card_type: str
    check: int
    difficulty: int
    zone: str
    committed: bool = False
    progressive_difficulty: int = 0
    image_url: Optional[str] = None


class ZoneInfo(BaseModel):
    """Zone contents. Deck cards are hidden: only the count is sent."""
    zone: str = Field(description="deck, hand, discard, card_pool, staging_area, in_play, removed")
    card_count: int = 0
    cards: list[CardInfo] = Field(default_factory=list)


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: int
    name: str
    character: Optional[CardInfo] = None
    health: int = 0
    max_health: int = 0
    hand_size: int = 0
    momentum: int = 0
    available_foundations: int = 0
    is_active: bool = False
    zones: list[ZoneInfo] = Field(default_factory=list)


class TurnInfo(BaseModel):
    """Turn position snapshot."""
    phase: str
    step: str
    active_player_id: int
    turn_number: int


class CheckInfo(BaseModel):
    """Outcome of a check."""
    success: bool
    total: int
    required: int
    revealed_value: int = 0
    revealed_card_ids: list[str] = Field(default_factory=list)
    foundations_committed: int = 0
    foundations_needed: int = 0
    deck_empty: bool = False


class AttackInfo(BaseModel):
    """The open attack, if any."""
    attacker_id: int
    defender_id: int
    attack_card_id: str
    block_card_id: Optional[str] = None
    speed: int = 0
    damage: int = 0
    resolved: bool = False


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a demo game."""
    player1_name: str = Field("Player 1", min_length=1, max_length=50)
    player2_name: str = Field("Player 2", min_length=1, max_length=50)
    starting_player: int = Field(1, ge=1, le=2)
    random_seed: Optional[int] = None
    start: bool = Field(True, description="Start the game immediately")


class PlayerRequest(BaseModel):
    """An action that only needs the acting player."""
    player_id: int = Field(..., ge=1, le=2)


class CardActionRequest(PlayerRequest):
    """An action on one card in the player's hand."""
    card_id: str


class CommitToCheckRequest(PlayerRequest):
    """Commit foundations to the pending check. count defaults to the minimum needed."""
    count: Optional[int] = Field(None, ge=0)


class PerformCheckRequest(PlayerRequest):
    difficulty: int = Field(..., ge=0)


class CommitFoundationsRequest(PlayerRequest):
    card_ids: list[str] = Field(..., min_length=1)


class MillRequest(PlayerRequest):
    count: int = Field(1, ge=0)


# =============================================================================
# Response Models
# =============================================================================

class GameResponse(BaseModel):
    """Full game view."""
    session_id: str
    session_state: str
    game_status: str
    turn: TurnInfo
    players: list[PlayerInfo] = Field(default_factory=list)
    current_attack: Optional[AttackInfo] = None
    pending_check: Optional[CheckInfo] = None
    winner_id: Optional[int] = None


class ActionResponse(BaseModel):
    """Result of a player action."""
    session_id: str
    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    state_changes: list[str] = Field(default_factory=list)
    check: Optional[CheckInfo] = None
    turn: TurnInfo
    game_status: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    active_sessions: int = 0
