"""
Tetromino catalog and rotation.

Shapes are 0/1 matrices; the colour tag is what gets stamped onto the board.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.rng import Rng

Shape = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class Tetromino:
    name: str
    shape: Shape
    color: str

    @property
    def width(self) -> int:
        return len(self.shape[0])


TETROMINOES: tuple[Tetromino, ...] = (
    Tetromino("I", ((1, 1, 1, 1),), "#00f0f0"),
    Tetromino("O", ((1, 1), (1, 1)), "#f0f000"),
    Tetromino("T", ((0, 1, 0), (1, 1, 1)), "#a000f0"),
    Tetromino("S", ((0, 1, 1), (1, 1, 0)), "#00f000"),
    Tetromino("Z", ((1, 1, 0), (0, 1, 1)), "#f00000"),
    Tetromino("J", ((1, 0, 0), (1, 1, 1)), "#0000f0"),
    Tetromino("L", ((0, 0, 1), (1, 1, 1)), "#f0a000"),
)

TETROMINO_BY_NAME = {t.name: t for t in TETROMINOES}


def random_tetromino(rng: Rng) -> tuple[Tetromino, Rng]:
    return rng.choice(TETROMINOES)


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise."""
    rows = len(shape)
    cols = len(shape[0])
    return tuple(
        tuple(shape[row][col] for row in range(rows - 1, -1, -1))
        for col in range(cols)
    )


def shape_cells(shape: Shape) -> list[tuple[int, int]]:
    """(row, col) offsets of the filled cells of a shape."""
    return [
        (r, c)
        for r, line in enumerate(shape)
        for c, filled in enumerate(line)
        if filled
    ]
