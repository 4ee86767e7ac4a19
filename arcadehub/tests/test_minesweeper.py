"""
Tests for the Minesweeper engine.

Tests:
- Safe first click and mine placement
- Flood fill reveals
- Flags
- Win and loss
"""

from ..engine_core.command import Command, CommandPayload, CommandType, EventKind, InputEvent
from ..engine_core.reducer import apply_command
from ..engine_core.rng import Rng
from ..engine_core.state import freeze_grid
from ..games import minesweeper
from ..games.minesweeper import Cell, MinesweeperState, new_game, reveal, toggle_flag
from ..primitives.grid import neighbors


def board_with_mines(mines, rows=5, cols=5):
    """A state with mines already laid at the given cells."""
    mines = set(mines)
    cells = [
        [
            Cell(
                is_mine=(r, c) in mines,
                adjacent_mines=0 if (r, c) in mines else sum(
                    1 for n in neighbors(r, c, rows, cols) if n in mines
                ),
            )
            for c in range(cols)
        ]
        for r in range(rows)
    ]
    return MinesweeperState(
        cells=freeze_grid(cells),
        rng=Rng(0),
        rows=rows,
        cols=cols,
        mine_count=len(mines),
        mines_placed=True,
    )


def mine_cells(state):
    return {
        (r, c)
        for r in range(state.rows)
        for c in range(state.cols)
        if state.cell(r, c).is_mine
    }


WALL = [(r, 2) for r in range(5)]


class TestFirstClick:
    """Mines are laid on the first reveal."""

    def test_no_mines_before_first_reveal(self):
        state = new_game(Rng(1))
        assert not state.mines_placed
        assert mine_cells(state) == set()
        assert state.flags_remaining == 10

    def test_first_click_and_neighbors_safe(self):
        for seed in range(25):
            state = reveal(new_game(Rng(seed)), 4, 4)
            mines = mine_cells(state)
            assert len(mines) == 10
            assert (4, 4) not in mines
            assert not mines & set(neighbors(4, 4, 9, 9))
            assert state.cell(4, 4).is_revealed
            assert not (state.terminal and not state.won)

    def test_counts_match_mines(self):
        state = reveal(new_game(Rng(8)), 0, 0)
        mines = mine_cells(state)
        for r in range(9):
            for c in range(9):
                if (r, c) not in mines:
                    expected = sum(1 for n in neighbors(r, c, 9, 9) if n in mines)
                    assert state.cell(r, c).adjacent_mines == expected

    def test_fewer_candidates_than_mines(self):
        """All candidate cells are mined when there are not enough of them."""
        state = reveal(new_game(Rng(2), rows=3, cols=4, mines=10), 0, 0)
        assert len(mine_cells(state)) == 8
        assert state.won
        assert state.terminal

    def test_flag_budget_matches_mines_laid(self):
        state = new_game(Rng(2), rows=3, cols=4, mines=10)
        assert state.flags_remaining == 10
        state = reveal(state, 0, 0)
        assert state.mine_count == 8
        assert state.flags_remaining == 8


class TestReveal:
    """Tests for revealing cells."""

    def test_flood_stops_at_numbers(self):
        state = reveal(board_with_mines(WALL), 0, 0)
        revealed = {
            (r, c) for r in range(5) for c in range(5) if state.cell(r, c).is_revealed
        }
        assert revealed == {(r, c) for r in range(5) for c in (0, 1)}
        assert state.score == 10
        assert not state.terminal

    def test_numbered_cell_reveals_only_itself(self):
        state = reveal(board_with_mines(WALL), 0, 1)
        assert state.score == 1

    def test_reveal_mine_loses(self):
        state = reveal(board_with_mines(WALL), 0, 2)
        assert state.terminal
        assert not state.won
        assert all(state.cell(r, c).is_revealed for r, c in WALL)

    def test_reveal_all_safe_wins(self):
        state = reveal(board_with_mines([(4, 4)]), 0, 0)
        assert state.won
        assert state.terminal
        assert state.score == 24

    def test_reveal_revealed_cell_is_noop(self):
        state = reveal(board_with_mines(WALL), 0, 1)
        assert reveal(state, 0, 1) is state

    def test_terminal_state_rejects_reveal(self):
        state = reveal(board_with_mines(WALL), 0, 2)
        result = apply_command(minesweeper.ENGINE, state, Command.reveal(0, 0))
        assert result.error_code == "GAME_OVER"


class TestFlags:
    """Tests for flagging."""

    def test_toggle_flag(self):
        state = toggle_flag(board_with_mines(WALL), 0, 0)
        assert state.cell(0, 0).is_flagged
        assert state.flags_remaining == 4
        state = toggle_flag(state, 0, 0)
        assert not state.cell(0, 0).is_flagged
        assert state.flags_remaining == 5

    def test_flagged_cell_cannot_be_revealed(self):
        state = toggle_flag(board_with_mines(WALL), 0, 0)
        assert reveal(state, 0, 0) is state

    def test_flag_blocks_flood(self):
        state = toggle_flag(board_with_mines([(4, 4)]), 0, 1)
        state = reveal(state, 0, 0)
        assert not state.cell(0, 1).is_revealed
        assert state.cell(0, 1).is_flagged
        assert not state.terminal
        assert state.score == 23

    def test_revealed_cell_cannot_be_flagged(self):
        state = reveal(board_with_mines(WALL), 0, 1)
        assert toggle_flag(state, 0, 1) is state


class TestHandlers:
    """Tests for command validation."""

    def test_out_of_bounds(self):
        state = new_game(Rng(1))
        result = apply_command(minesweeper.ENGINE, state, Command.reveal(9, 0))
        assert not result.success
        assert result.error_code == "OUT_OF_BOUNDS"

        result = apply_command(minesweeper.ENGINE, state, Command.toggle_flag(0, -1))
        assert result.error_code == "OUT_OF_BOUNDS"

    def test_missing_coordinates(self):
        state = new_game(Rng(1))
        result = apply_command(minesweeper.ENGINE, state, Command(CommandType.REVEAL, CommandPayload()))
        assert result.error_code == "OUT_OF_BOUNDS"

    def test_primary_click_reveals(self):
        command = minesweeper.resolve_input(InputEvent(EventKind.CLICK, row=2, col=3))
        assert command == Command.reveal(2, 3)

    def test_secondary_click_flags(self):
        command = minesweeper.resolve_input(InputEvent(EventKind.CLICK, row=2, col=3, button=2))
        assert command == Command.toggle_flag(2, 3)

    def test_keys_ignored(self):
        assert minesweeper.resolve_input(InputEvent(EventKind.KEY_DOWN, key="f")) is None
