"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Player picks a game from the catalog → session created (in memory)
2. During the game the session's driver owns the engine state
3. Game over → final score reported once to the score store
4. Player restarts (same session, fresh state) or leaves (session ended)

PERSISTENCE RULES:
- Engine state is session-scoped and never saved
- Only final scores reach the score store
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..games import get_engine
from .driver import ScoreReporter, TickDriver

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"
    ENDED = "ended"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """
    An ephemeral game session.

    The session is destroyed when the player leaves.
    State is NOT persisted.
    """
    session_id: str
    game_id: str
    driver: TickDriver
    created_at: float
    state: SessionState = SessionState.ACTIVE
    last_activity: float = field(default_factory=time.time)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def touch(self):
        self.last_activity = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions for catalog games
    - Track active sessions
    - Clean up abandoned sessions
    """

    def __init__(self, reporter: ScoreReporter | None = None):
        self.reporter = reporter
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        game_id: str,
        seed: int | None = None,
        player_name: str | None = None,
    ) -> Session:
        """
        Create a new game session.

        Raises ValueError for a game that is not in the catalog.
        """
        engine = get_engine(game_id)
        if engine is None:
            raise ValueError(f"Unknown game: {game_id}")

        session = Session(
            session_id=str(uuid.uuid4()),
            game_id=game_id,
            driver=TickDriver(engine, reporter=self.reporter, seed=seed, player_name=player_name),
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s started for %s", session.session_id, game_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its state.

        Returns False when the session does not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ABANDONED if reason == "stale" else SessionState.ENDED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> int:
        """
        Drop sessions idle for longer than max_idle_seconds.

        Returns how many were removed.
        """
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.last_activity > max_idle_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
