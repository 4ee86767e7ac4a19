"""
Reducer - Applies commands and ticks to engine state.

The reducer is the single point of state transition.
All state changes must go through apply() or tick().

Design principles:
- Pure function: (state, command) -> new_state
- Validates before applying
- Returns CommandResult with success/failure
- Never raises: a handler fault is an engine bug, and the game ends
  in a terminal state instead of continuing on a corrupt board
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any

from .command import Command, CommandResult
from .contract import Engine

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies commands to engine state.

    Stateless - all state is in the snapshot.
    The engine provides the rules.
    """
    engine: Engine

    def apply(self, state: Any, command: Command) -> CommandResult:
        """
        Apply a command to the game state.

        Returns CommandResult with new state or error.
        """
        validation_error = self._validate_command(state, command)
        if validation_error:
            return CommandResult.failure(validation_error, error_code="GAME_OVER")

        handler = self.engine.handlers.get(command.command_type)
        if not handler:
            return CommandResult.failure(
                f"{self.engine.game_id} does not accept {command.command_type.value}",
                error_code="NO_HANDLER",
            )

        try:
            return handler(state, command.payload)
        except Exception:
            logger.exception(
                "Invariant violation in %s while applying %s; ending game",
                self.engine.game_id,
                command.command_type.value,
            )
            return CommandResult(
                success=False,
                new_state=_terminated(state),
                error="Internal engine error; game ended",
                error_code="INVARIANT_VIOLATION",
            )

    def tick(self, state: Any) -> Any:
        """
        Advance time by one step.

        No-op for terminal states; each engine also ignores ticks
        before its game has started.
        """
        if self.engine.is_terminal(state):
            return state
        try:
            return self.engine.tick(state)
        except Exception:
            logger.exception("Invariant violation in %s during tick; ending game", self.engine.game_id)
            return _terminated(state)

    def _validate_command(self, state: Any, command: Command) -> str | None:
        """
        Validate that a command is allowed in the current state.

        Returns error message if invalid, None if valid.
        """
        if self.engine.is_terminal(state):
            return "Game is over - start a new game"
        return None


def _terminated(state: Any) -> Any:
    return state._copy_with(terminal=True)


def apply_command(engine: Engine, state: Any, command: Command) -> CommandResult:
    """
    Convenience function to apply a command.

    Creates a Reducer and applies the command.
    """
    return Reducer(engine=engine).apply(state, command)
