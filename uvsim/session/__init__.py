"""
Session Module - In-memory game sessions.

A session represents one game:
- Created when a client starts a game
- Holds the GameEngine for that game
- Removed when the game ends or the client leaves

Sessions are EPHEMERAL: no persistence.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
