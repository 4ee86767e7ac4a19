"""
Command System - Commands, payloads, results and raw input events.

Commands represent:
1. Discrete player inputs (move, rotate, flap, reveal, guess, launch)
2. Flipper hold/release changes

Timer ticks are not commands; they go through Reducer.tick().
All other state changes flow through commands.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommandType(Enum):
    """Types of commands accepted by the engines."""
    # Tetris
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"

    # Flappy Bird
    FLAP = "flap"

    # 2048
    MOVE = "move"

    # Minesweeper
    REVEAL = "reveal"
    TOGGLE_FLAG = "toggle_flag"

    # Wordle
    SUBMIT_GUESS = "submit_guess"

    # Pinball
    LAUNCH = "launch"
    SET_FLIPPER = "set_flipper"


class Direction(Enum):
    """Slide directions for 2048."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Side(Enum):
    """Flipper sides for pinball."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class CommandPayload:
    """
    Parameters for a command.

    Different command types use different fields; validation happens
    in the engine handler.
    """
    row: int | None = None
    col: int | None = None
    direction: Direction | None = None
    word: str | None = None
    side: Side | None = None
    active: bool | None = None


@dataclass(frozen=True)
class Command:
    """
    A complete command to be applied to an engine state.

    Commands are:
    - Applied atomically by the reducer
    - Replayable: the same seed and command sequence yields the same game
    """
    command_type: CommandType
    payload: CommandPayload = field(default_factory=CommandPayload)

    @classmethod
    def simple(cls, command_type: CommandType) -> Command:
        """Factory for commands without parameters."""
        return cls(command_type=command_type)

    @classmethod
    def move(cls, direction: Direction) -> Command:
        """Factory for a 2048 slide."""
        return cls(
            command_type=CommandType.MOVE,
            payload=CommandPayload(direction=direction),
        )

    @classmethod
    def reveal(cls, row: int, col: int) -> Command:
        return cls(
            command_type=CommandType.REVEAL,
            payload=CommandPayload(row=row, col=col),
        )

    @classmethod
    def toggle_flag(cls, row: int, col: int) -> Command:
        return cls(
            command_type=CommandType.TOGGLE_FLAG,
            payload=CommandPayload(row=row, col=col),
        )

    @classmethod
    def submit_guess(cls, word: str) -> Command:
        return cls(
            command_type=CommandType.SUBMIT_GUESS,
            payload=CommandPayload(word=word),
        )

    @classmethod
    def set_flipper(cls, side: Side, active: bool) -> Command:
        return cls(
            command_type=CommandType.SET_FLIPPER,
            payload=CommandPayload(side=side, active=active),
        )


@dataclass
class CommandResult:
    """
    Result of applying a command.

    Contains:
    - Whether the command was accepted
    - New state (if accepted)
    - Error message and code (if rejected)
    - Human-readable changes (for logging and UI)
    """
    success: bool
    new_state: Any | None = None
    error: str | None = None
    error_code: str | None = None
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> CommandResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> CommandResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, changes=changes or [])


class EventKind(Enum):
    """Kinds of raw input delivered by a presentation layer."""
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"
    CLICK = "click"
    TEXT = "text"


@dataclass(frozen=True)
class InputEvent:
    """
    A raw input event before it is resolved to a command.

    key: key name as reported by the browser ("ArrowLeft", " ", "a")
    button: 0 for primary click, 2 for secondary click
    text: a full typed entry (Wordle)
    """
    kind: EventKind
    key: str | None = None
    row: int | None = None
    col: int | None = None
    button: int = 0
    text: str | None = None

    @property
    def normalized_key(self) -> str:
        return (self.key or "").lower()
