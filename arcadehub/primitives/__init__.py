"""
Primitives - Grid operations and 2-D collision math shared by the engines.
"""

from .grid import (
    flood_fill,
    full_rows,
    in_bounds,
    neighbors,
    remove_rows,
    slide_and_merge_row,
    transpose,
)
from .vector import Collision, Vec2, circle_circle_collision, line_circle_collision

__all__ = [
    "flood_fill",
    "full_rows",
    "in_bounds",
    "neighbors",
    "remove_rows",
    "slide_and_merge_row",
    "transpose",
    "Collision",
    "Vec2",
    "circle_circle_collision",
    "line_circle_collision",
]
