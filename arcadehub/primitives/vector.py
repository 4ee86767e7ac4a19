"""
2-D vector math and circle collision tests for the physics engines.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return (self - other).length()

    @classmethod
    def from_angle(cls, degrees: float, length: float = 1.0) -> Vec2:
        rad = math.radians(degrees)
        return cls(length * math.cos(rad), length * math.sin(rad))


@dataclass(frozen=True)
class Collision:
    """Outcome of a collision test."""
    collided: bool
    contact_point: Vec2
    normal: Vec2


_UP = Vec2(0.0, -1.0)


def line_circle_collision(
    segment_start: Vec2,
    segment_end: Vec2,
    circle_center: Vec2,
    radius: float,
) -> Collision:
    """
    Test a circle against a line segment.

    The circle centre is projected onto the segment and the projection
    parameter is clamped to [0, segment length]. The circle collides when
    the distance from the centre to that closest point is below the radius.
    The normal points from the contact point towards the centre.
    """
    seg = segment_end - segment_start
    seg_len = seg.length()
    if seg_len == 0:
        closest = segment_start
    else:
        unit = seg.scale(1.0 / seg_len)
        t = max(0.0, min(seg_len, (circle_center - segment_start).dot(unit)))
        closest = segment_start + unit.scale(t)

    offset = circle_center - closest
    dist = offset.length()
    if dist >= radius:
        return Collision(collided=False, contact_point=closest, normal=Vec2(0.0, 0.0))

    # centre exactly on the segment: push out upwards
    normal = offset.scale(1.0 / dist) if dist > 0 else _UP
    return Collision(collided=True, contact_point=closest, normal=normal)


def circle_circle_collision(
    center: Vec2,
    radius: float,
    other_center: Vec2,
    other_radius: float,
) -> Collision:
    """
    Test a moving circle against a fixed one.

    The normal points from the fixed circle towards the moving circle,
    and the contact point is where the moving circle's centre must sit to
    just touch the fixed circle.
    """
    offset = center - other_center
    dist = offset.length()
    min_dist = radius + other_radius
    if dist >= min_dist:
        return Collision(collided=False, contact_point=center, normal=Vec2(0.0, 0.0))

    normal = offset.scale(1.0 / dist) if dist > 0 else _UP
    return Collision(
        collided=True,
        contact_point=other_center + normal.scale(min_dist),
        normal=normal,
    )
