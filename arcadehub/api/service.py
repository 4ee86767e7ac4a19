"""
API Service - Business logic layer between API and engines.

The service:
1. Translates API requests to driver calls
2. Manages sessions
3. Owns the high-score store the drivers report to
4. Builds the player-facing view of each engine state

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.command import Command, InputEvent
from ..engine_core.state import to_plain
from ..games.catalog import GAMES, GameDefinition, get_game
from ..games.wordle import letter_states
from ..scores import HighScoreStore, ScoreEntry
from ..session import Session, SessionManager, TurnResult


@dataclass
class APIService:
    """
    Main API service for presentation layers.

    Usage:
        service = APIService()

        session = service.create_session("tetris", seed=7)
        session, result = service.dispatch_event(session.session_id, event)
        top = service.get_scores("tetris")
    """
    score_store: HighScoreStore = field(default_factory=HighScoreStore)
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(reporter=self.score_store)

    # -------------------------------------------------------------------------
    # Catalog & scores
    # -------------------------------------------------------------------------

    def list_games(self) -> list[GameDefinition]:
        return list(GAMES)

    def get_game(self, game_id: str) -> GameDefinition | None:
        return get_game(game_id)

    def get_scores(self, game_id: str) -> list[ScoreEntry]:
        """Raises ValueError for an unknown game."""
        return self.score_store.get_scores(game_id)

    def submit_score(
        self,
        game_id: str,
        score: int,
        player_name: str | None = None,
    ) -> list[ScoreEntry]:
        return self.score_store.add_score(game_id, score, player_name)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def create_session(
        self,
        game_id: str,
        seed: int | None = None,
        player_name: str | None = None,
    ) -> Session:
        """Raises ValueError for an unknown game."""
        return self.session_manager.create_session(game_id, seed=seed, player_name=player_name)

    def get_session(self, session_id: str) -> Session | None:
        return self.session_manager.get_session(session_id)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def apply_command(
        self,
        session_id: str,
        command: Command,
    ) -> tuple[Session, TurnResult] | None:
        session = self._touch(session_id)
        if not session:
            return None
        return session, session.driver.apply(command)

    def dispatch_event(
        self,
        session_id: str,
        event: InputEvent,
    ) -> tuple[Session, TurnResult] | None:
        session = self._touch(session_id)
        if not session:
            return None
        return session, session.driver.dispatch(event)

    def tick(self, session_id: str, count: int = 1) -> tuple[Session, TurnResult] | None:
        session = self._touch(session_id)
        if not session:
            return None
        return session, session.driver.tick(count)

    def restart(
        self,
        session_id: str,
        seed: int | None = None,
    ) -> tuple[Session, TurnResult] | None:
        session = self._touch(session_id)
        if not session:
            return None
        return session, session.driver.restart(seed)

    def _touch(self, session_id: str) -> Session | None:
        session = self.session_manager.get_session(session_id)
        if session:
            session.touch()
        return session

    # -------------------------------------------------------------------------
    # State views
    # -------------------------------------------------------------------------

    def public_state(self, session: Session) -> dict[str, Any]:
        """
        Plain view of the session's current state.

        The random generator is dropped and anything the player should
        not see yet (the Wordle secret, unrevealed mines) is masked
        until the game ends.
        """
        state = session.driver.state
        data = to_plain(state)
        data.pop("rng", None)

        if session.game_id == "wordle":
            if not state.terminal:
                data["secret"] = None
            data["attempts_used"] = state.attempts_used
            data["letter_states"] = {
                letter: mark.value for letter, mark in letter_states(state).items()
            }
        elif session.game_id == "minesweeper":
            data["flags_remaining"] = state.flags_remaining
            if not state.terminal:
                for row in data["cells"]:
                    for cell in row:
                        if not cell["is_revealed"]:
                            cell["is_mine"] = False
                            cell["adjacent_mines"] = 0
        elif session.game_id == "2048":
            data["max_tile"] = state.max_tile

        return data
