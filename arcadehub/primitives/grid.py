"""
Grid primitives shared by the board games.

All functions are pure and work on tuple-of-tuples or list-of-lists grids
indexed [row][col].
"""

from __future__ import annotations
from collections import deque
from typing import Any, Callable, Iterator, Sequence

Cell = tuple[int, int]


def in_bounds(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def neighbors(row: int, col: int, rows: int, cols: int) -> Iterator[Cell]:
    """In-bounds 8-neighbours of a cell."""
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            nr, nc = row + dr, col + dc
            if in_bounds(nr, nc, rows, cols):
                yield nr, nc


def flood_fill(
    rows: int,
    cols: int,
    start_row: int,
    start_col: int,
    is_blocked: Callable[[int, int], bool],
    is_zero: Callable[[int, int], bool],
) -> set[Cell]:
    """
    Breadth-first reveal from a start cell.

    Blocked cells are never revealed. A non-zero cell is revealed but
    the fill does not continue through it. Each cell is visited once.
    """
    if not in_bounds(start_row, start_col, rows, cols) or is_blocked(start_row, start_col):
        return set()

    revealed = {(start_row, start_col)}
    visited = {(start_row, start_col)}
    queue: deque[Cell] = deque()
    if is_zero(start_row, start_col):
        queue.append((start_row, start_col))

    while queue:
        r, c = queue.popleft()
        for nr, nc in neighbors(r, c, rows, cols):
            if (nr, nc) in visited:
                continue
            visited.add((nr, nc))
            if is_blocked(nr, nc):
                continue
            revealed.add((nr, nc))
            if is_zero(nr, nc):
                queue.append((nr, nc))

    return revealed


def full_rows(board: Sequence[Sequence[Any]]) -> list[int]:
    """Indexes of rows with every cell occupied (not None)."""
    return [r for r, row in enumerate(board) if all(cell is not None for cell in row)]


def remove_rows(board: Sequence[Sequence[Any]], rows_to_remove: Sequence[int], width: int) -> list[list[Any]]:
    """
    Drop the given rows and shift everything above them down.

    Empty rows are added on top so the board keeps its height.
    """
    doomed = set(rows_to_remove)
    kept = [list(row) for r, row in enumerate(board) if r not in doomed]
    empty = [[None] * width for _ in range(len(board) - len(kept))]
    return empty + kept


def transpose(grid: Sequence[Sequence[Any]]) -> list[list[Any]]:
    return [list(col) for col in zip(*grid)]


def slide_and_merge_row(row: Sequence[int], width: int) -> tuple[tuple[int, ...], int]:
    """
    Slide a row to the left, merging equal neighbours.

    Each pair merges at most once per pass, so a tile created by a merge
    cannot merge again. Returns the new row and the points gained (sum of
    merged tile values).

    >>> slide_and_merge_row((2, 2, 2, 2), 4)
    ((4, 4, 0, 0), 8)
    """
    tiles = [value for value in row if value != 0]
    merged: list[int] = []
    points = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            value = tiles[i] * 2
            merged.append(value)
            points += value
            i += 2
        else:
            merged.append(tiles[i])
            i += 1
    merged.extend([0] * (width - len(merged)))
    return tuple(merged), points
