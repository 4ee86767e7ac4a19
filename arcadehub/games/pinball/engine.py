"""
Pinball engine.

Commands only touch the launcher and flipper fields; all motion happens in
tick(). Each tick integrates gravity, damps the velocity, then resolves
walls, bumpers and flippers in that order. The ball draining past the
bottom edge ends the game.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.command import (
    Command, CommandPayload, CommandResult, CommandType, EventKind, InputEvent, Side,
)
from ...engine_core.contract import Engine
from ...engine_core.rng import Rng
from ...engine_core.state import Snapshot
from ...primitives.vector import Vec2, circle_circle_collision, line_circle_collision
from .layout import (
    BUMPERS, FLIPPERS, LAUNCHER_X, LAUNCHER_Y, TABLE_HEIGHT, TABLE_WIDTH, Bumper,
)

GRAVITY = 0.3
BALL_RADIUS = 8
DAMPING = 0.98
WALL_RESTITUTION = 0.8
WALL_POINTS = 10
BUMPER_POINTS = 100
BUMPER_BOOST = 8
FLIPPER_FORCE = 12
FLIPPER_REST_FORCE = 4
LAUNCH_VELOCITY = -15
LAUNCH_DRIFT_RANGE = (-1.5, -0.5)


@dataclass(frozen=True)
class Ball:
    position: Vec2
    velocity: Vec2 = Vec2(0.0, 0.0)
    radius: float = BALL_RADIUS


@dataclass(frozen=True)
class FlipperState:
    side: Side
    angle: float
    active: bool = False

    @property
    def endpoints(self) -> tuple[Vec2, Vec2]:
        geometry = FLIPPERS[self.side]
        return geometry.pivot, geometry.pivot + Vec2.from_angle(self.angle, geometry.length)


@dataclass(frozen=True)
class PinballState(Snapshot):
    ball: Ball
    rng: Rng
    left_flipper: FlipperState
    right_flipper: FlipperState
    bumpers: tuple[Bumper, ...] = BUMPERS
    launch_drift: float = 0.0
    score: int = 0
    launched: bool = False
    terminal: bool = False

    @property
    def flippers(self) -> tuple[FlipperState, FlipperState]:
        return self.left_flipper, self.right_flipper


def _resting(side: Side) -> FlipperState:
    return FlipperState(side=side, angle=FLIPPERS[side].base_angle)


def new_game(rng: Rng) -> PinballState:
    drift, rng = rng.uniform(*LAUNCH_DRIFT_RANGE)
    return PinballState(
        ball=Ball(position=Vec2(LAUNCHER_X, LAUNCHER_Y)),
        rng=rng,
        left_flipper=_resting(Side.LEFT),
        right_flipper=_resting(Side.RIGHT),
        launch_drift=drift,
    )


def launch(state: PinballState) -> PinballState:
    if state.launched or state.terminal:
        return state
    ball = Ball(state.ball.position, Vec2(state.launch_drift, LAUNCH_VELOCITY), state.ball.radius)
    return state._copy_with(ball=ball, launched=True)


def set_flipper(state: PinballState, side: Side, active: bool) -> PinballState:
    if state.terminal:
        return state
    geometry = FLIPPERS[side]
    flipper = FlipperState(
        side=side,
        angle=geometry.active_angle if active else geometry.base_angle,
        active=active,
    )
    if side == Side.LEFT:
        return state._copy_with(left_flipper=flipper)
    return state._copy_with(right_flipper=flipper)


def tick(state: PinballState) -> PinballState:
    if not state.launched or state.terminal:
        return state

    radius = state.ball.radius
    velocity = state.ball.velocity + Vec2(0.0, GRAVITY)
    position = state.ball.position + velocity
    velocity = velocity.scale(DAMPING)
    score = state.score

    x, y = position.x, position.y
    vx, vy = velocity.x, velocity.y
    if x - radius < 0:
        x = radius
        vx = -vx * WALL_RESTITUTION
        score += WALL_POINTS
    if x + radius > TABLE_WIDTH:
        x = TABLE_WIDTH - radius
        vx = -vx * WALL_RESTITUTION
        score += WALL_POINTS
    if y - radius < 0:
        y = radius
        vy = -vy * WALL_RESTITUTION
    if y + radius > TABLE_HEIGHT:
        drained = Ball(Vec2(x, y), Vec2(vx, vy), radius)
        return state._copy_with(ball=drained, score=score, terminal=True)

    position, velocity = Vec2(x, y), Vec2(vx, vy)

    for bumper in state.bumpers:
        hit = circle_circle_collision(position, radius, bumper.center, bumper.radius)
        if hit.collided:
            position = hit.contact_point
            velocity = hit.normal.scale(velocity.length() + BUMPER_BOOST)
            score += BUMPER_POINTS

    for flipper in state.flippers:
        start, end = flipper.endpoints
        hit = line_circle_collision(start, end, position, radius)
        if hit.collided:
            force = FLIPPER_FORCE if flipper.active else FLIPPER_REST_FORCE
            position = hit.contact_point + hit.normal.scale(radius)
            velocity = Vec2(hit.normal.x * force, -abs(hit.normal.y * force))

    position = _clamp_to_table(position, radius)
    return state._copy_with(ball=Ball(position, velocity, radius), score=score)


def _clamp_to_table(position: Vec2, radius: float) -> Vec2:
    x = min(max(position.x, radius), TABLE_WIDTH - radius)
    y = min(max(position.y, radius), TABLE_HEIGHT - radius)
    return Vec2(x, y)


def _handle_launch(state: PinballState, payload: CommandPayload) -> CommandResult:
    return CommandResult.success_with_state(launch(state))


def _handle_set_flipper(state: PinballState, payload: CommandPayload) -> CommandResult:
    if payload.side is None or payload.active is None:
        return CommandResult.failure("Flipper side and active flag are required", error_code="INVALID_COMMAND")
    return CommandResult.success_with_state(set_flipper(state, payload.side, payload.active))


HANDLERS = {
    CommandType.LAUNCH: _handle_launch,
    CommandType.SET_FLIPPER: _handle_set_flipper,
}

FLIPPER_KEYS = {
    "arrowleft": Side.LEFT,
    "a": Side.LEFT,
    "arrowright": Side.RIGHT,
    "d": Side.RIGHT,
}


def resolve_input(event: InputEvent) -> Command | None:
    key = event.normalized_key
    if event.kind == EventKind.KEY_DOWN and key == " ":
        return Command.simple(CommandType.LAUNCH)
    side = FLIPPER_KEYS.get(key)
    if side is None:
        return None
    if event.kind == EventKind.KEY_DOWN:
        return Command.set_flipper(side, True)
    if event.kind == EventKind.KEY_UP:
        return Command.set_flipper(side, False)
    return None


ENGINE = Engine(
    game_id="pinball",
    new_game=new_game,
    handlers=HANDLERS,
    tick=tick,
    resolve_input=resolve_input,
)
