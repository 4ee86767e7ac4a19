"""
Engine Core - Shared contract for the deterministic game engines.

The core provides:
1. Commands and input events
2. The Engine capability record
3. The Reducer that applies commands and ticks
4. Seedable randomness and snapshot helpers
"""

from .command import (
    Command,
    CommandPayload,
    CommandResult,
    CommandType,
    Direction,
    EventKind,
    InputEvent,
    Side,
)
from .contract import Engine
from .reducer import Reducer, apply_command
from .rng import Rng
from .state import Snapshot, freeze_grid, thaw_grid, to_plain

__all__ = [
    "Command",
    "CommandPayload",
    "CommandResult",
    "CommandType",
    "Direction",
    "EventKind",
    "InputEvent",
    "Side",
    "Engine",
    "Reducer",
    "apply_command",
    "Rng",
    "Snapshot",
    "freeze_grid",
    "thaw_grid",
    "to_plain",
]
