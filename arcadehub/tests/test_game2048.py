"""
Tests for the 2048 engine.
"""

import pytest

from ..engine_core.command import Command, CommandPayload, CommandType, Direction, EventKind, InputEvent
from ..engine_core.reducer import apply_command
from ..engine_core.rng import Rng
from ..engine_core.state import freeze_grid
from ..games import game2048
from ..games.game2048 import (
    Game2048State,
    empty_cells,
    from_canonical,
    has_moves,
    move,
    move_grid,
    new_game,
    spawn_tile,
    to_canonical,
)


def make_state(rows, score=0):
    return Game2048State(grid=freeze_grid(rows), rng=Rng(11), score=score)


def tiles(grid):
    return [value for row in grid for value in row if value]


class TestNewGame:
    def test_two_starting_tiles(self):
        state = new_game(Rng(3))
        values = tiles(state.grid)
        assert len(values) == 2
        assert all(value in (2, 4) for value in values)
        assert state.score == 0

    def test_mostly_twos(self):
        values = []
        for seed in range(200):
            values.extend(tiles(new_game(Rng(seed)).grid))
        fours = values.count(4)
        assert 0 < fours < len(values) // 4


class TestMoveGrid:
    """Tests for sliding the whole grid."""

    GRID = freeze_grid([
        [2, 2, 0, 4],
        [0, 0, 0, 0],
        [2, 0, 0, 4],
        [0, 0, 0, 8],
    ])

    def test_left(self):
        grid, points = move_grid(self.GRID, Direction.LEFT)
        assert grid[0] == (4, 4, 0, 0)
        assert grid[2] == (2, 4, 0, 0)
        assert points == 4

    def test_right(self):
        grid, points = move_grid(self.GRID, Direction.RIGHT)
        assert grid[0] == (0, 0, 4, 4)
        assert grid[3] == (0, 0, 0, 8)
        assert points == 4

    def test_up(self):
        grid, points = move_grid(self.GRID, Direction.UP)
        assert [row[0] for row in grid] == [4, 0, 0, 0]
        assert [row[3] for row in grid] == [8, 8, 0, 0]
        assert points == 12

    def test_down(self):
        grid, points = move_grid(self.GRID, Direction.DOWN)
        assert [row[0] for row in grid] == [0, 0, 0, 4]
        assert [row[3] for row in grid] == [0, 0, 8, 8]
        assert points == 12

    def test_merged_tile_not_merged_twice(self):
        grid, points = move_grid(freeze_grid([[4, 2, 2, 0]] + [[0] * 4] * 3), Direction.LEFT)
        assert grid[0] == (4, 4, 0, 0)
        assert points == 4


class TestOrientation:
    """Tests for turning each direction into a left slide and back."""

    GRIDS = [
        freeze_grid([
            [2, 4, 8, 16],
            [32, 64, 128, 256],
            [512, 1024, 2048, 4],
            [0, 2, 0, 8],
        ]),
        freeze_grid([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 4],
        ]),
        freeze_grid([[0] * 4] * 4),
    ]

    @pytest.mark.parametrize("direction", list(Direction))
    @pytest.mark.parametrize("grid", GRIDS)
    def test_round_trip(self, grid, direction):
        assert from_canonical(to_canonical(grid, direction), direction) == grid

    def test_right_becomes_left(self):
        canonical = to_canonical(self.GRIDS[0], Direction.RIGHT)
        assert canonical[0] == (16, 8, 4, 2)

    def test_down_becomes_left(self):
        canonical = to_canonical(self.GRIDS[0], Direction.DOWN)
        # first column read bottom to top
        assert canonical[0] == (0, 512, 32, 2)


class TestMove:
    """Tests for a full move: slide, score, spawn."""

    def test_move_spawns_one_tile_and_scores(self):
        state = make_state([
            [2, 2, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        moved = move(state, Direction.LEFT)
        assert moved.score == 4
        assert moved.grid[0][0] == 4
        assert len(tiles(moved.grid)) == 2
        assert moved.rng != state.rng

    def test_unchanged_move_is_noop(self):
        state = make_state([
            [2, 4, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        assert move(state, Direction.LEFT) is state

    def test_game_over_when_no_moves_left(self):
        state = make_state([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 8],
            [0, 8, 16, 32],
        ])
        moved = move(state, Direction.LEFT)
        assert moved.grid[3][:3] == (8, 16, 32)
        assert moved.grid[3][3] in (2, 4)
        assert moved.terminal
        assert not has_moves(moved.grid)

    def test_max_tile(self):
        state = make_state([[2, 0, 0, 0], [0, 64, 0, 0], [0, 0, 8, 0], [0, 0, 0, 0]])
        assert state.max_tile == 64

    def test_spawn_on_full_grid_is_noop(self):
        grid = freeze_grid([[2, 4, 2, 4], [4, 2, 4, 2]] * 2)
        assert empty_cells(grid) == []
        assert spawn_tile(grid, Rng(1)) == (grid, Rng(1))


class TestHandler:
    def test_move_command(self):
        state = make_state([[0, 0, 0, 2], [0] * 4, [0] * 4, [0] * 4])
        result = apply_command(game2048.ENGINE, state, Command.move(Direction.LEFT))
        assert result.success
        assert result.new_state.grid[0][0] == 2

    def test_missing_direction_rejected(self):
        state = new_game(Rng(1))
        result = apply_command(game2048.ENGINE, state, Command(CommandType.MOVE, CommandPayload()))
        assert not result.success
        assert result.error_code == "INVALID_COMMAND"

    def test_no_tick(self):
        state = new_game(Rng(1))
        assert game2048.ENGINE.tick(state) is state

    @pytest.mark.parametrize("key,direction", [
        ("ArrowLeft", Direction.LEFT),
        ("d", Direction.RIGHT),
        ("ArrowUp", Direction.UP),
        ("S", Direction.DOWN),
    ])
    def test_bindings(self, key, direction):
        command = game2048.resolve_input(InputEvent(EventKind.KEY_DOWN, key=key))
        assert command == Command.move(direction)

    def test_click_ignored(self):
        assert game2048.resolve_input(InputEvent(EventKind.CLICK, row=0, col=0)) is None
