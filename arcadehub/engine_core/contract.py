"""
Engine Contract - The capability record every game provides.

An Engine is a plain record of functions, not a base class. The six
games are polymorphic by each exporting one ENGINE value built from
their own pure functions:

    new_game(rng) -> state
    handlers[command_type](state, payload) -> CommandResult
    tick(state) -> state
    resolve_input(event) -> Command | None

Every state exposes `terminal` and `score`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .command import Command, CommandPayload, CommandResult, CommandType, InputEvent
from .rng import Rng

Handler = Callable[[Any, CommandPayload], CommandResult]


def _no_tick(state: Any) -> Any:
    return state


def _no_input(event: InputEvent) -> Command | None:
    return None


@dataclass(frozen=True)
class Engine:
    """Capabilities of one game engine."""
    game_id: str
    new_game: Callable[[Rng], Any]
    handlers: Mapping[CommandType, Handler] = field(default_factory=dict)
    tick: Callable[[Any], Any] = _no_tick
    resolve_input: Callable[[InputEvent], Command | None] = _no_input

    def accepts(self, command_type: CommandType) -> bool:
        return command_type in self.handlers

    @staticmethod
    def is_terminal(state: Any) -> bool:
        return bool(state.terminal)

    @staticmethod
    def score(state: Any) -> int:
        return int(state.score)
