"""
2048 engine.

Every move is computed as a slide to the left: the grid is oriented so the
requested direction becomes "left", each row is slid and merged, and the
grid is oriented back.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.command import (
    Command, CommandPayload, CommandResult, CommandType, Direction, EventKind, InputEvent,
)
from ..engine_core.contract import Engine
from ..engine_core.rng import Rng
from ..engine_core.state import Snapshot, freeze_grid
from ..primitives.grid import slide_and_merge_row, transpose

SIZE = 4
FOUR_PROBABILITY = 0.1

Grid = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class Game2048State(Snapshot):
    grid: Grid
    rng: Rng
    score: int = 0
    terminal: bool = False

    @property
    def max_tile(self) -> int:
        return max(max(row) for row in self.grid)


def empty_grid() -> Grid:
    return freeze_grid([[0] * SIZE for _ in range(SIZE)])


def empty_cells(grid: Grid) -> list[tuple[int, int]]:
    return [(r, c) for r in range(SIZE) for c in range(SIZE) if grid[r][c] == 0]


def spawn_tile(grid: Grid, rng: Rng) -> tuple[Grid, Rng]:
    """Put a 2 (90%) or 4 (10%) into a random empty cell; no-op when full."""
    cells = empty_cells(grid)
    if not cells:
        return grid, rng
    (row, col), rng = rng.choice(cells)
    roll, rng = rng.random()
    value = 4 if roll < FOUR_PROBABILITY else 2
    rows = [list(line) for line in grid]
    rows[row][col] = value
    return freeze_grid(rows), rng


def new_game(rng: Rng) -> Game2048State:
    grid, rng = spawn_tile(empty_grid(), rng)
    grid, rng = spawn_tile(grid, rng)
    return Game2048State(grid=grid, rng=rng)


def to_canonical(grid: Grid, direction: Direction) -> Grid:
    """Orient the grid so that `direction` becomes a slide to the left."""
    if direction == Direction.LEFT:
        return grid
    if direction == Direction.RIGHT:
        return freeze_grid(reversed(row) for row in grid)
    if direction == Direction.UP:
        return freeze_grid(transpose(grid))
    return freeze_grid(reversed(row) for row in transpose(grid))


def from_canonical(grid: Grid, direction: Direction) -> Grid:
    """Inverse of to_canonical."""
    if direction == Direction.LEFT:
        return grid
    if direction == Direction.RIGHT:
        return freeze_grid(reversed(row) for row in grid)
    if direction == Direction.UP:
        return freeze_grid(transpose(grid))
    return freeze_grid(transpose([list(reversed(row)) for row in grid]))


def move_grid(grid: Grid, direction: Direction) -> tuple[Grid, int]:
    """Slide and merge the whole grid. Returns (new grid, points gained)."""
    canonical = to_canonical(grid, direction)
    rows = []
    points = 0
    for row in canonical:
        new_row, gained = slide_and_merge_row(row, SIZE)
        rows.append(new_row)
        points += gained
    return from_canonical(freeze_grid(rows), direction), points


def has_moves(grid: Grid) -> bool:
    if empty_cells(grid):
        return True
    for r in range(SIZE):
        for c in range(SIZE):
            if c + 1 < SIZE and grid[r][c] == grid[r][c + 1]:
                return True
            if r + 1 < SIZE and grid[r][c] == grid[r + 1][c]:
                return True
    return False


def move(state: Game2048State, direction: Direction) -> Game2048State:
    """A move that changes nothing is a no-op: no spawn, no score."""
    if state.terminal:
        return state
    moved, points = move_grid(state.grid, direction)
    if moved == state.grid:
        return state
    grid, rng = spawn_tile(moved, state.rng)
    return state._copy_with(
        grid=grid,
        rng=rng,
        score=state.score + points,
        terminal=not has_moves(grid),
    )


def _handle_move(state: Game2048State, payload: CommandPayload) -> CommandResult:
    if payload.direction is None:
        return CommandResult.failure("Move needs a direction", error_code="INVALID_COMMAND")
    return CommandResult.success_with_state(move(state, payload.direction))


HANDLERS = {
    CommandType.MOVE: _handle_move,
}

KEY_BINDINGS = {
    "arrowleft": Direction.LEFT,
    "a": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "d": Direction.RIGHT,
    "arrowup": Direction.UP,
    "w": Direction.UP,
    "arrowdown": Direction.DOWN,
    "s": Direction.DOWN,
}


def resolve_input(event: InputEvent) -> Command | None:
    if event.kind != EventKind.KEY_DOWN:
        return None
    direction = KEY_BINDINGS.get(event.normalized_key)
    return Command.move(direction) if direction else None


ENGINE = Engine(
    game_id="2048",
    new_game=new_game,
    handlers=HANDLERS,
    resolve_input=resolve_input,
)
