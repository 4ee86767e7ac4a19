"""
Game State - Shared helpers for immutable engine snapshots.

Design principles:
- Immutable: every engine state is a frozen dataclass; transitions
  return a new snapshot and never mutate the old one
- Serializable: snapshots convert to plain dicts for the API
- Observable: every state exposes `terminal` and `score`
"""

from __future__ import annotations
from dataclasses import asdict, is_dataclass, replace
from enum import Enum
from typing import Any, Iterable, TypeVar

S = TypeVar("S", bound="Snapshot")


class Snapshot:
    """Mixin for frozen engine states."""

    def _copy_with(self: S, **kwargs: Any) -> S:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


def freeze_grid(rows: Iterable[Iterable[Any]]) -> tuple[tuple[Any, ...], ...]:
    """Convert nested lists into a tuple-of-tuples grid."""
    return tuple(tuple(row) for row in rows)


def thaw_grid(grid: Iterable[Iterable[Any]]) -> list[list[Any]]:
    """Mutable working copy of a grid, for use inside a transition."""
    return [list(row) for row in grid]


def to_plain(state: Any) -> Any:
    """
    Convert a snapshot into JSON-friendly data.

    Enums become their values and tuples become lists.
    """
    if is_dataclass(state) and not isinstance(state, type):
        return _plain(asdict(state))
    return _plain(state)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
