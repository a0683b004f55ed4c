"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A client creates a session: a GameEngine is built and set up
2. The client drives the game through actions addressed by card id
3. The game finishes or the client ends the session: it is dropped

PERSISTENCE RULES:
- Sessions live in memory only, keyed by session id
- One engine per session, nothing shared between sessions
- The manager is injected into the service layer rather than held as
  module state
"""

from __future__ import annotations
import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..engine_core.game import GameEngine, GameStatus
from ..cards.demo import create_demo_game

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """State of a game session."""
    CREATED = "created"  # Engine set up, game not started
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # A winner (or draw) was decided
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class Session:
    """One game, owned by one client."""
    session_id: str
    engine: GameEngine
    created_at: float
    state: SessionState = SessionState.CREATED
    last_active_at: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def touch(self) -> None:
        """Refresh session state from the engine after an action."""
        self.last_active_at = time.time()
        status = self.engine.get_status()
        if status == GameStatus.IN_PROGRESS:
            self.state = SessionState.ACTIVE
        elif status == GameStatus.FINISHED:
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Tracks game sessions.

    Responsibilities:
    - Create sessions with a set-up engine
    - Look sessions up by id
    - Drop ended and stale sessions
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        player1_name: str = "Player 1",
        player2_name: str = "Player 2",
        starting_player: int = 1,
        random_seed: int | None = None,
        start: bool = True,
    ) -> Session:
        """
        Create a session around a demo game.

        Args:
            player1_name: Display name for player 1
            player2_name: Display name for player 2
            starting_player: 1 or 2
            random_seed: Seed for deck building and shuffling
            start: Start the game right away

        Returns:
            New Session
        """
        engine = create_demo_game(
            player1_name=player1_name,
            player2_name=player2_name,
            starting_player=starting_player,
            random_seed=random_seed,
        )
        return self.add_engine(engine, start=start)

    def add_engine(self, engine: GameEngine, start: bool = False) -> Session:
        """Wrap an existing engine in a new session."""
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=now,
            last_active_at=now,
        )
        if start:
            engine.start_game()
        session.touch()
        self._sessions[session.session_id] = session
        logger.info("Session %s created", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state != SessionState.GAME_OVER:
            session.state = SessionState.ABANDONED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """End sessions idle for longer than max_age_seconds. Returns how many."""
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.last_active_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
