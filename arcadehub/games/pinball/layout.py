"""
Pinball table layout: dimensions, bumpers and flipper pivots.

The layout is fixed when the table is built and never changes during play.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.command import Side
from ...primitives.vector import Vec2

TABLE_WIDTH = 400
TABLE_HEIGHT = 700
LAUNCHER_X = 360
LAUNCHER_Y = TABLE_HEIGHT - 100


@dataclass(frozen=True)
class Bumper:
    center: Vec2
    radius: float


@dataclass(frozen=True)
class FlipperSpec:
    side: Side
    pivot: Vec2
    length: float
    base_angle: float
    swing: float

    @property
    def active_angle(self) -> float:
        # left swings counter-clockwise (up), right swings clockwise (up)
        if self.side == Side.LEFT:
            return self.base_angle - self.swing
        return self.base_angle + self.swing


BUMPERS: tuple[Bumper, ...] = (
    Bumper(Vec2(200, 150), 20),
    Bumper(Vec2(120, 250), 18),
    Bumper(Vec2(280, 250), 18),
    Bumper(Vec2(100, 380), 16),
    Bumper(Vec2(300, 380), 16),
    Bumper(Vec2(200, 480), 17),
)

LEFT_FLIPPER = FlipperSpec(Side.LEFT, Vec2(120, 620), 80, 30, 60)
RIGHT_FLIPPER = FlipperSpec(Side.RIGHT, Vec2(280, 620), 80, 150, 60)

FLIPPERS = {
    Side.LEFT: LEFT_FLIPPER,
    Side.RIGHT: RIGHT_FLIPPER,
}
