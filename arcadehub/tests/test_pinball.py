"""
Tests for the Pinball engine.

Tests:
- Launching
- Gravity, damping and walls
- Bumpers and flippers
- Draining ends the game
"""

import pytest

from ..engine_core.command import Command, CommandType, EventKind, InputEvent, Side
from ..engine_core.reducer import apply_command
from ..engine_core.rng import Rng
from ..games.pinball import ENGINE
from ..games.pinball.engine import (
    BUMPER_POINTS,
    DAMPING,
    FLIPPER_FORCE,
    FLIPPER_REST_FORCE,
    GRAVITY,
    LAUNCH_DRIFT_RANGE,
    LAUNCH_VELOCITY,
    WALL_POINTS,
    WALL_RESTITUTION,
    Ball,
    launch,
    new_game,
    set_flipper,
    tick,
)
from ..games.pinball.layout import BUMPERS, LAUNCHER_X, LAUNCHER_Y, LEFT_FLIPPER, RIGHT_FLIPPER
from ..primitives.vector import Vec2


def in_play(x, y, vx=0.0, vy=0.0):
    """A launched game with the ball placed by hand."""
    state = launch(new_game(Rng(4)))
    return state._copy_with(ball=Ball(Vec2(x, y), Vec2(vx, vy)))


def resting_on(state, flipper, gap=5.0):
    """Place the ball just above the middle of a flipper."""
    start, end = flipper.endpoints
    mid = (start + end).scale(0.5)
    d = (end - start).scale(1.0 / (end - start).length())
    normal = Vec2(d.y, -d.x) if -d.x < 0 else Vec2(-d.y, d.x)
    return state._copy_with(ball=Ball(mid + normal.scale(gap), Vec2(0.0, 0.0)))


class TestLaunch:
    """Tests for the plunger."""

    def test_ball_waits_in_launcher(self):
        state = new_game(Rng(4))
        assert state.ball.position == Vec2(LAUNCHER_X, LAUNCHER_Y)
        assert not state.launched
        assert tick(state) == state

    def test_drift_in_range(self):
        for seed in range(10):
            drift = new_game(Rng(seed)).launch_drift
            assert LAUNCH_DRIFT_RANGE[0] <= drift <= LAUNCH_DRIFT_RANGE[1]

    def test_launch_sets_velocity(self):
        state = launch(new_game(Rng(4)))
        assert state.launched
        assert state.ball.velocity == Vec2(state.launch_drift, LAUNCH_VELOCITY)

    def test_second_launch_is_noop(self):
        state = launch(new_game(Rng(4)))
        assert launch(state) is state

    def test_first_tick_after_launch(self):
        state = launch(new_game(Rng(4)))
        moved = tick(state)
        expected_vy = LAUNCH_VELOCITY + GRAVITY
        assert moved.ball.position.y == pytest.approx(LAUNCHER_Y + expected_vy)
        assert moved.ball.velocity.y == pytest.approx(expected_vy * DAMPING)
        assert not moved.terminal


class TestWalls:
    """Tests for wall bounces and draining."""

    def test_left_wall_bounce_scores(self):
        state = tick(in_play(5.0, 300.0, vx=-3.0))
        assert state.ball.position.x == 8
        assert state.ball.velocity.x == pytest.approx(3.0 * DAMPING * WALL_RESTITUTION)
        assert state.score == WALL_POINTS

    def test_right_wall_bounce_scores(self):
        state = tick(in_play(395.0, 300.0, vx=3.0))
        assert state.ball.position.x == 392
        assert state.ball.velocity.x < 0
        assert state.score == WALL_POINTS

    def test_ceiling_bounce_no_points(self):
        state = tick(in_play(50.0, 5.0, vy=-3.0))
        assert state.ball.position.y == 8
        assert state.ball.velocity.y > 0
        assert state.score == 0

    def test_drain_ends_game(self):
        state = tick(in_play(50.0, 695.0, vy=5.0))
        assert state.terminal

    def test_no_ticks_after_drain(self):
        state = tick(in_play(50.0, 695.0, vy=5.0))
        assert tick(state) is state


class TestBumpers:
    def test_bumper_pushes_ball_out(self):
        # bumper at (200, 150), radius 20
        state = tick(in_play(200.0, 175.0, vy=-2.0))
        assert state.ball.position.x == pytest.approx(200)
        assert state.ball.position.y == pytest.approx(178)
        speed_before = (-2.0 + GRAVITY) * DAMPING
        assert state.ball.velocity.y == pytest.approx(abs(speed_before) + 8)
        assert state.score == BUMPER_POINTS

    def test_ball_rests_on_bumper_surface(self):
        bumper = BUMPERS[0]
        state = tick(in_play(205.0, 172.0, vx=1.0, vy=-2.0))
        gap = state.ball.position.distance_to(bumper.center)
        assert gap == pytest.approx(bumper.radius + state.ball.radius)


class TestFlippers:
    """Tests for flipper state and hits."""

    def test_set_flipper_angles(self):
        state = set_flipper(new_game(Rng(1)), Side.LEFT, True)
        assert state.left_flipper.active
        assert state.left_flipper.angle == LEFT_FLIPPER.base_angle - LEFT_FLIPPER.swing

        state = set_flipper(state, Side.RIGHT, True)
        assert state.right_flipper.angle == RIGHT_FLIPPER.base_angle + RIGHT_FLIPPER.swing

        state = set_flipper(state, Side.LEFT, False)
        assert not state.left_flipper.active
        assert state.left_flipper.angle == LEFT_FLIPPER.base_angle

    @pytest.mark.parametrize("side", [Side.LEFT, Side.RIGHT])
    def test_resting_flipper_deflects_gently(self, side):
        state = in_play(0.0, 0.0)
        flipper = state.left_flipper if side == Side.LEFT else state.right_flipper
        hit = tick(resting_on(state, flipper))
        assert hit.ball.velocity.y < 0
        assert hit.ball.velocity.length() == pytest.approx(FLIPPER_REST_FORCE)

    @pytest.mark.parametrize("side", [Side.LEFT, Side.RIGHT])
    def test_active_flipper_hits_hard(self, side):
        state = set_flipper(in_play(0.0, 0.0), side, True)
        flipper = state.left_flipper if side == Side.LEFT else state.right_flipper
        hit = tick(resting_on(state, flipper))
        assert hit.ball.velocity.y < 0
        assert hit.ball.velocity.length() == pytest.approx(FLIPPER_FORCE)


class TestCommands:
    def test_missing_side_rejected(self):
        result = apply_command(ENGINE, new_game(Rng(1)), Command.simple(CommandType.SET_FLIPPER))
        assert not result.success
        assert result.error_code == "INVALID_COMMAND"

    def test_launch_command(self):
        result = apply_command(ENGINE, new_game(Rng(1)), Command.simple(CommandType.LAUNCH))
        assert result.new_state.launched

    def test_space_launches(self):
        command = ENGINE.resolve_input(InputEvent(EventKind.KEY_DOWN, key=" "))
        assert command.command_type == CommandType.LAUNCH

    def test_flipper_keys_hold_and_release(self):
        down = ENGINE.resolve_input(InputEvent(EventKind.KEY_DOWN, key="ArrowLeft"))
        up = ENGINE.resolve_input(InputEvent(EventKind.KEY_UP, key="ArrowLeft"))
        assert down == Command.set_flipper(Side.LEFT, True)
        assert up == Command.set_flipper(Side.LEFT, False)
        assert ENGINE.resolve_input(InputEvent(EventKind.KEY_DOWN, key="d")) == Command.set_flipper(Side.RIGHT, True)

    def test_click_ignored(self):
        assert ENGINE.resolve_input(InputEvent(EventKind.CLICK, row=1, col=1)) is None


class TestDeterminism:
    def test_same_seed_same_game(self):
        def play(seed):
            state = launch(new_game(Rng(seed)))
            for i in range(300):
                state = set_flipper(state, Side.LEFT, i % 20 < 5)
                state = tick(state)
            return state

        assert play(9) == play(9)
