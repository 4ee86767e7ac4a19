"""
Tetris engine.

A falling piece is moved, rotated and dropped on a 20x10 board. Locking
happens inside the same transition that fails to move the piece down:
stamp, clear full rows, score, spawn the next piece. A spawn that
collides ends the game.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.command import Command, CommandPayload, CommandResult, CommandType, EventKind, InputEvent
from ...engine_core.contract import Engine
from ...engine_core.rng import Rng
from ...engine_core.state import Snapshot, freeze_grid
from ...primitives.grid import full_rows, in_bounds, remove_rows
from .tetrominoes import Shape, Tetromino, random_tetromino, rotate_cw, shape_cells

ROWS = 20
COLS = 10
POINTS_PER_LINE = 100

# (row offset, col offset), tried in order after a rotation
WALL_KICKS = ((0, 0), (0, -1), (0, 1), (0, -2), (0, 2), (-1, 0), (1, 0))

Board = tuple[tuple[str | None, ...], ...]


@dataclass(frozen=True)
class ActivePiece:
    shape: Shape
    color: str
    row: int
    col: int

    def moved(self, d_row: int = 0, d_col: int = 0) -> ActivePiece:
        return ActivePiece(self.shape, self.color, self.row + d_row, self.col + d_col)


@dataclass(frozen=True)
class TetrisState(Snapshot):
    board: Board
    piece: ActivePiece
    next_piece: Tetromino
    rng: Rng
    score: int = 0
    lines_cleared: int = 0
    terminal: bool = False


def empty_board() -> Board:
    return freeze_grid([[None] * COLS for _ in range(ROWS)])


def spawn_piece(tetromino: Tetromino) -> ActivePiece:
    """Place a tetromino at the top, centred horizontally."""
    return ActivePiece(
        shape=tetromino.shape,
        color=tetromino.color,
        row=0,
        col=(COLS - tetromino.width) // 2,
    )


def fits(board: Board, shape: Shape, row: int, col: int) -> bool:
    """A placement is valid iff every filled cell is in bounds and empty."""
    for r, c in shape_cells(shape):
        br, bc = row + r, col + c
        if not in_bounds(br, bc, ROWS, COLS):
            return False
        if board[br][bc] is not None:
            return False
    return True


def new_game(rng: Rng) -> TetrisState:
    current, rng = random_tetromino(rng)
    upcoming, rng = random_tetromino(rng)
    return TetrisState(
        board=empty_board(),
        piece=spawn_piece(current),
        next_piece=upcoming,
        rng=rng,
    )


def _shift(state: TetrisState, d_col: int) -> TetrisState:
    if state.terminal:
        return state
    moved = state.piece.moved(d_col=d_col)
    if fits(state.board, moved.shape, moved.row, moved.col):
        return state._copy_with(piece=moved)
    return state


def move_left(state: TetrisState) -> TetrisState:
    return _shift(state, -1)


def move_right(state: TetrisState) -> TetrisState:
    return _shift(state, 1)


def rotate(state: TetrisState) -> TetrisState:
    """Rotate clockwise, trying each wall kick in order; reject if none fit."""
    if state.terminal:
        return state
    piece = state.piece
    rotated = rotate_cw(piece.shape)
    for d_row, d_col in WALL_KICKS:
        row, col = piece.row + d_row, piece.col + d_col
        if fits(state.board, rotated, row, col):
            return state._copy_with(piece=ActivePiece(rotated, piece.color, row, col))
    return state


def soft_drop(state: TetrisState) -> TetrisState:
    """Move down one row, or lock the piece if it cannot move."""
    if state.terminal:
        return state
    lowered = state.piece.moved(d_row=1)
    if fits(state.board, lowered.shape, lowered.row, lowered.col):
        return state._copy_with(piece=lowered)
    return lock_piece(state)


def hard_drop(state: TetrisState) -> TetrisState:
    if state.terminal:
        return state
    piece = state.piece
    while fits(state.board, piece.shape, piece.row + 1, piece.col):
        piece = piece.moved(d_row=1)
    return lock_piece(state._copy_with(piece=piece))


def lock_piece(state: TetrisState) -> TetrisState:
    """
    Stamp the active piece, clear full rows and spawn the next piece.

    The score of this transition is kept even when the spawn ends the game.
    """
    piece = state.piece
    if not fits(state.board, piece.shape, piece.row, piece.col):
        # overlapping piece: never stamp it over occupied cells
        return state._copy_with(terminal=True)

    board = [list(row) for row in state.board]
    for r, c in shape_cells(piece.shape):
        board[piece.row + r][piece.col + c] = piece.color

    cleared = full_rows(board)
    if cleared:
        board = remove_rows(board, cleared, COLS)

    new_board = freeze_grid(board)
    spawned = spawn_piece(state.next_piece)
    upcoming, rng = random_tetromino(state.rng)

    return state._copy_with(
        board=new_board,
        piece=spawned,
        next_piece=upcoming,
        rng=rng,
        score=state.score + POINTS_PER_LINE * len(cleared),
        lines_cleared=state.lines_cleared + len(cleared),
        terminal=not fits(new_board, spawned.shape, spawned.row, spawned.col),
    )


def tick(state: TetrisState) -> TetrisState:
    return soft_drop(state)


def _wrap(transition):
    def handler(state: TetrisState, payload: CommandPayload) -> CommandResult:
        return CommandResult.success_with_state(transition(state))
    return handler


HANDLERS = {
    CommandType.MOVE_LEFT: _wrap(move_left),
    CommandType.MOVE_RIGHT: _wrap(move_right),
    CommandType.SOFT_DROP: _wrap(soft_drop),
    CommandType.HARD_DROP: _wrap(hard_drop),
    CommandType.ROTATE: _wrap(rotate),
}

KEY_BINDINGS = {
    "arrowleft": CommandType.MOVE_LEFT,
    "a": CommandType.MOVE_LEFT,
    "arrowright": CommandType.MOVE_RIGHT,
    "d": CommandType.MOVE_RIGHT,
    "arrowdown": CommandType.SOFT_DROP,
    "s": CommandType.SOFT_DROP,
    "arrowup": CommandType.ROTATE,
    "w": CommandType.ROTATE,
    " ": CommandType.HARD_DROP,
}


def resolve_input(event: InputEvent) -> Command | None:
    if event.kind != EventKind.KEY_DOWN:
        return None
    command_type = KEY_BINDINGS.get(event.normalized_key)
    return Command.simple(command_type) if command_type else None


ENGINE = Engine(
    game_id="tetris",
    new_game=new_game,
    handlers=HANDLERS,
    tick=tick,
    resolve_input=resolve_input,
)
