"""
Action System - Actions, payloads, and results.

Actions address cards by id so callers outside the engine (sessions, the
HTTP API) never hold live Card objects. GameEngine.apply() resolves the ids
against the acting player's zones and dispatches to the matching operation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Player-facing engine operations."""
    # Ready phase
    PLAY_FOUNDATION = "play_foundation"
    PLAY_ASSET = "play_asset"

    # Combat phase
    DECLARE_ATTACK = "declare_attack"
    DECLARE_BLOCK = "declare_block"

    # Checks
    PLAY_TO_CARD_POOL = "play_to_card_pool"
    REVEAL_CHECK = "reveal_check"
    COMMIT_TO_CHECK = "commit_to_check"
    PERFORM_CHECK = "perform_check"
    COMMIT_FOUNDATIONS = "commit_foundations"
    MILL = "mill"

    # Turn flow
    PROCESS_TURN = "process_turn"
    ADVANCE_PHASE = "advance_phase"
    END_TURN = "end_turn"


@dataclass
class ActionPayload:
    """
    Parameters for an action.

    Different action types use different fields; validation happens in
    the engine.
    """
    player_id: int | None = None
    card_id: str | None = None
    card_ids: list[str] = field(default_factory=list)
    count: int | None = None
    difficulty: int | None = None


@dataclass
class Action:
    """An action to apply to a game."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def play_foundation(cls, player_id: int, card_id: str) -> Action:
        return cls(ActionType.PLAY_FOUNDATION, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def play_asset(cls, player_id: int, card_id: str) -> Action:
        return cls(ActionType.PLAY_ASSET, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def declare_attack(cls, player_id: int, card_id: str) -> Action:
        return cls(ActionType.DECLARE_ATTACK, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def declare_block(cls, player_id: int, card_id: str) -> Action:
        return cls(ActionType.DECLARE_BLOCK, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def play_to_card_pool(cls, player_id: int, card_id: str) -> Action:
        return cls(ActionType.PLAY_TO_CARD_POOL, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def reveal_check(cls, player_id: int) -> Action:
        return cls(ActionType.REVEAL_CHECK, ActionPayload(player_id=player_id))

    @classmethod
    def commit_to_check(cls, player_id: int, count: int | None = None) -> Action:
        return cls(ActionType.COMMIT_TO_CHECK, ActionPayload(player_id=player_id, count=count))

    @classmethod
    def perform_check(cls, player_id: int, difficulty: int) -> Action:
        return cls(ActionType.PERFORM_CHECK, ActionPayload(player_id=player_id, difficulty=difficulty))

    @classmethod
    def commit_foundations(cls, player_id: int, card_ids: list[str]) -> Action:
        return cls(ActionType.COMMIT_FOUNDATIONS, ActionPayload(player_id=player_id, card_ids=card_ids))

    @classmethod
    def mill(cls, player_id: int, count: int) -> Action:
        return cls(ActionType.MILL, ActionPayload(player_id=player_id, count=count))

    @classmethod
    def process_turn(cls) -> Action:
        return cls(ActionType.PROCESS_TURN)

    @classmethod
    def advance_phase(cls) -> Action:
        return cls(ActionType.ADVANCE_PHASE)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(ActionType.END_TURN)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    A failed result is a rule violation, never an exception.
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    # Human-readable changes for the presentation layer
    state_changes: list[str] = field(default_factory=list)

    # Check details, for check actions
    check: dict[str, Any] | None = None

    @classmethod
    def failure(cls, error: str, error_code: str = "RULE_VIOLATION") -> ActionResult:
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, changes: list[str] | None = None, check: dict[str, Any] | None = None) -> ActionResult:
        return cls(success=True, state_changes=changes or [], check=check)
