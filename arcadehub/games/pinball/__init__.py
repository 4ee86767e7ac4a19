"""
Pinball - launch the ball, keep it alive with flippers, score off bumpers.
"""

from .engine import ENGINE, Ball, FlipperState, PinballState, launch, new_game, set_flipper, tick
from .layout import BUMPERS, TABLE_HEIGHT, TABLE_WIDTH, Bumper

__all__ = [
    "ENGINE",
    "Ball",
    "FlipperState",
    "PinballState",
    "launch",
    "new_game",
    "set_flipper",
    "tick",
    "BUMPERS",
    "TABLE_HEIGHT",
    "TABLE_WIDTH",
    "Bumper",
]
