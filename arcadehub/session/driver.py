"""
Tick Driver - Adapts external events to engine transitions.

The driver:
1. Receives a key press, click, typed word or timer tick
2. Resolves it to one of the engine's commands (or ignores it)
3. Applies the transition through the reducer
4. Replaces the held state
5. Reports the final score exactly once when the game ends

The driver is the single owner of the current state. Calls are applied
in the order they arrive; nothing is merged or reordered.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Protocol

from ..engine_core.command import Command, InputEvent
from ..engine_core.contract import Engine
from ..engine_core.reducer import Reducer
from ..engine_core.rng import Rng

logger = logging.getLogger(__name__)


class ScoreReporter(Protocol):
    def add_score(self, game_id: str, score: int, player_name: str | None = None) -> Any:
        ...


class DriverState(Enum):
    """State of the driver."""
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of feeding one event, command or batch of ticks to the driver.

    Rejected commands carry a message for the player; the driver never
    retries them.
    """
    success: bool
    driver_state: DriverState
    score: int
    terminal: bool

    # Event resolved to no command
    ignored: bool = False

    # Errors / changes
    message: str | None = None
    error_code: str | None = None
    changes: list[str] = field(default_factory=list)

    # Set only on the transition that ended the game
    reported_score: int | None = None


class TickDriver:
    """
    Owns one game's state and drives it.

    Usage:
        driver = TickDriver(ENGINES["tetris"], reporter=score_store)

        # keyboard / pointer
        driver.dispatch(InputEvent(EventKind.KEY_DOWN, key="ArrowLeft"))

        # timer
        driver.tick()

        if driver.is_over:
            driver.restart()
    """

    def __init__(
        self,
        engine: Engine,
        reporter: ScoreReporter | None = None,
        seed: int | None = None,
        player_name: str | None = None,
    ):
        self.engine = engine
        self.reducer = Reducer(engine=engine)
        self.reporter = reporter
        self.player_name = player_name
        self.seed = seed
        self.state: Any = engine.new_game(Rng.from_seed(seed))
        self.games_played = 1
        self._reported = False

    @property
    def is_over(self) -> bool:
        return self.engine.is_terminal(self.state)

    @property
    def score(self) -> int:
        return self.engine.score(self.state)

    @property
    def driver_state(self) -> DriverState:
        return DriverState.GAME_OVER if self.is_over else DriverState.RUNNING

    def dispatch(self, event: InputEvent) -> TurnResult:
        """Resolve a raw input event and apply the resulting command."""
        command = self.engine.resolve_input(event)
        if command is None:
            return self._result(success=True, ignored=True)
        return self.apply(command)

    def apply(self, command: Command) -> TurnResult:
        result = self.reducer.apply(self.state, command)
        if result.new_state is not None:
            self.state = result.new_state
        reported = self._report_if_over()
        return self._result(
            success=result.success,
            message=result.error,
            error_code=result.error_code,
            changes=result.changes,
            reported_score=reported,
        )

    def tick(self, count: int = 1) -> TurnResult:
        """Advance `count` timer ticks, stopping early once the game ends."""
        reported = None
        for _ in range(count):
            if self.is_over:
                break
            self.state = self.reducer.tick(self.state)
            reported = self._report_if_over()
        return self._result(success=True, reported_score=reported)

    def restart(self, seed: int | None = None) -> TurnResult:
        """Discard the current state and start a fresh game."""
        self.seed = seed
        self.state = self.engine.new_game(Rng.from_seed(seed))
        self.games_played += 1
        self._reported = False
        return self._result(success=True, changes=["New game started"])

    def _report_if_over(self) -> int | None:
        if not self.is_over or self._reported:
            return None
        self._reported = True
        score = self.score
        logger.info("Game over: %s scored %d", self.engine.game_id, score)
        if self.reporter is not None:
            try:
                self.reporter.add_score(self.engine.game_id, score, self.player_name)
            except ValueError as e:
                logger.warning("Score for %s not recorded: %s", self.engine.game_id, e)
        return score

    def _result(self, success: bool, **kwargs: Any) -> TurnResult:
        return TurnResult(
            success=success,
            driver_state=self.driver_state,
            score=self.score,
            terminal=self.is_over,
            **kwargs,
        )
