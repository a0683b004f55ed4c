"""
API Module - HTTP interface to game sessions.

Exposes the engine via REST for a presentation layer. A client:
1. Creates a game
2. Drives turn flow and plays cards by id
3. Reads the full game view after each action

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayerRequest,
    CardActionRequest,
    CommitToCheckRequest,
    PerformCheckRequest,
    CommitFoundationsRequest,
    MillRequest,
    # Responses
    GameResponse,
    ActionResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    CardInfo,
    ZoneInfo,
    PlayerInfo,
    TurnInfo,
    CheckInfo,
    AttackInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayerRequest",
    "CardActionRequest",
    "CommitToCheckRequest",
    "PerformCheckRequest",
    "CommitFoundationsRequest",
    "MillRequest",
    # Responses
    "GameResponse",
    "ActionResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "CardInfo",
    "ZoneInfo",
    "PlayerInfo",
    "TurnInfo",
    "CheckInfo",
    "AttackInfo",
    # Service
    "APIService",
    "create_app",
]
