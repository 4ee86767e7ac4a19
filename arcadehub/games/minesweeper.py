"""
Minesweeper engine.

Mines are laid on the first reveal so that the first clicked cell and its
neighbours are always safe. Adjacent-mine counts are computed once, when
the mines are laid.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.command import Command, CommandPayload, CommandResult, CommandType, EventKind, InputEvent
from ..engine_core.contract import Engine
from ..engine_core.rng import Rng
from ..engine_core.state import Snapshot, freeze_grid, thaw_grid
from ..primitives.grid import flood_fill, in_bounds, neighbors

ROWS = 9
COLS = 9
MINES = 10


@dataclass(frozen=True)
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0


@dataclass(frozen=True)
class MinesweeperState(Snapshot):
    cells: tuple[tuple[Cell, ...], ...]
    rng: Rng
    rows: int = ROWS
    cols: int = COLS
    mine_count: int = MINES
    mines_placed: bool = False
    terminal: bool = False
    won: bool = False

    @property
    def score(self) -> int:
        """Revealed safe cells."""
        return sum(
            1
            for row in self.cells
            for cell in row
            if cell.is_revealed and not cell.is_mine
        )

    @property
    def flags_remaining(self) -> int:
        flagged = sum(1 for row in self.cells for cell in row if cell.is_flagged)
        return self.mine_count - flagged

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]


def new_game(rng: Rng, rows: int = ROWS, cols: int = COLS, mines: int = MINES) -> MinesweeperState:
    return MinesweeperState(
        cells=freeze_grid([[Cell() for _ in range(cols)] for _ in range(rows)]),
        rng=rng,
        rows=rows,
        cols=cols,
        mine_count=mines,
    )


def place_mines(state: MinesweeperState, safe_row: int, safe_col: int) -> MinesweeperState:
    """
    Lay mines anywhere except the safe cell and its neighbours,
    then compute every adjacent-mine count.
    """
    forbidden = {(safe_row, safe_col), *neighbors(safe_row, safe_col, state.rows, state.cols)}
    candidates = [
        (r, c)
        for r in range(state.rows)
        for c in range(state.cols)
        if (r, c) not in forbidden
    ]
    mined, rng = state.rng.sample(candidates, state.mine_count)
    mine_set = set(mined)

    grid = thaw_grid(state.cells)
    for r in range(state.rows):
        for c in range(state.cols):
            is_mine = (r, c) in mine_set
            count = 0 if is_mine else sum(
                1 for n in neighbors(r, c, state.rows, state.cols) if n in mine_set
            )
            old = grid[r][c]
            grid[r][c] = Cell(
                is_mine=is_mine,
                is_revealed=old.is_revealed,
                is_flagged=old.is_flagged,
                adjacent_mines=count,
            )

    return state._copy_with(
        cells=freeze_grid(grid),
        rng=rng,
        mine_count=len(mined),
        mines_placed=True,
    )


def _all_safe_revealed(cells: tuple[tuple[Cell, ...], ...]) -> bool:
    return all(cell.is_revealed for row in cells for cell in row if not cell.is_mine)


def reveal(state: MinesweeperState, row: int, col: int) -> MinesweeperState:
    if state.terminal or not in_bounds(row, col, state.rows, state.cols):
        return state
    target = state.cell(row, col)
    if target.is_revealed or target.is_flagged:
        return state

    if not state.mines_placed:
        state = place_mines(state, row, col)
        target = state.cell(row, col)

    grid = thaw_grid(state.cells)

    if target.is_mine:
        for r in range(state.rows):
            for c in range(state.cols):
                if grid[r][c].is_mine:
                    grid[r][c] = _revealed(grid[r][c])
        return state._copy_with(cells=freeze_grid(grid), terminal=True, won=False)

    opened = flood_fill(
        state.rows,
        state.cols,
        row,
        col,
        is_blocked=lambda r, c: state.cells[r][c].is_mine or state.cells[r][c].is_flagged,
        is_zero=lambda r, c: state.cells[r][c].adjacent_mines == 0,
    )
    for r, c in opened:
        grid[r][c] = _revealed(grid[r][c])

    cells = freeze_grid(grid)
    won = _all_safe_revealed(cells)
    return state._copy_with(cells=cells, terminal=won, won=won)


def _revealed(cell: Cell) -> Cell:
    return Cell(
        is_mine=cell.is_mine,
        is_revealed=True,
        is_flagged=cell.is_flagged,
        adjacent_mines=cell.adjacent_mines,
    )


def toggle_flag(state: MinesweeperState, row: int, col: int) -> MinesweeperState:
    if state.terminal or not in_bounds(row, col, state.rows, state.cols):
        return state
    cell = state.cell(row, col)
    if cell.is_revealed:
        return state
    grid = thaw_grid(state.cells)
    grid[row][col] = Cell(
        is_mine=cell.is_mine,
        is_revealed=False,
        is_flagged=not cell.is_flagged,
        adjacent_mines=cell.adjacent_mines,
    )
    return state._copy_with(cells=freeze_grid(grid))


def _validate_coordinates(state: MinesweeperState, payload: CommandPayload) -> str | None:
    if payload.row is None or payload.col is None:
        return "Row and column are required"
    if not in_bounds(payload.row, payload.col, state.rows, state.cols):
        return f"Cell ({payload.row}, {payload.col}) is outside the {state.rows}x{state.cols} board"
    return None


def _handle_reveal(state: MinesweeperState, payload: CommandPayload) -> CommandResult:
    error = _validate_coordinates(state, payload)
    if error:
        return CommandResult.failure(error, error_code="OUT_OF_BOUNDS")
    return CommandResult.success_with_state(reveal(state, payload.row, payload.col))


def _handle_toggle_flag(state: MinesweeperState, payload: CommandPayload) -> CommandResult:
    error = _validate_coordinates(state, payload)
    if error:
        return CommandResult.failure(error, error_code="OUT_OF_BOUNDS")
    return CommandResult.success_with_state(toggle_flag(state, payload.row, payload.col))


HANDLERS = {
    CommandType.REVEAL: _handle_reveal,
    CommandType.TOGGLE_FLAG: _handle_toggle_flag,
}


def resolve_input(event: InputEvent) -> Command | None:
    """Primary click reveals, secondary click flags."""
    if event.kind != EventKind.CLICK or event.row is None or event.col is None:
        return None
    if event.button == 2:
        return Command.toggle_flag(event.row, event.col)
    return Command.reveal(event.row, event.col)


ENGINE = Engine(
    game_id="minesweeper",
    new_game=new_game,
    handlers=HANDLERS,
    resolve_input=resolve_input,
)
