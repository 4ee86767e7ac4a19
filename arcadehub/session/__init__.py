"""
Session Module - Drives games and manages ephemeral sessions.

A session represents one player at one game:
- Created when the player picks a game
- Holds a driver that owns the current engine state
- Reports the final score once per game over
- Destroyed when the player leaves
"""

from .driver import DriverState, ScoreReporter, TickDriver, TurnResult
from .manager import Session, SessionManager, SessionState

__all__ = [
    "DriverState",
    "ScoreReporter",
    "TickDriver",
    "TurnResult",
    "Session",
    "SessionManager",
    "SessionState",
]
