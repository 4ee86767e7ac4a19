"""
Flappy Bird engine.

The bird falls under gravity and flaps upward; pipes scroll left and
each one scores a point once the bird is past its trailing edge.
Pipes are kept rightmost first.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.command import Command, CommandPayload, CommandResult, CommandType, EventKind, InputEvent
from ..engine_core.contract import Engine
from ..engine_core.rng import Rng
from ..engine_core.state import Snapshot

GRAVITY = 0.5
FLAP_VELOCITY = -8.0
PIPE_WIDTH = 60
PIPE_GAP = 150
PIPE_SPEED = 3
BIRD_SIZE = 30
BIRD_X = 80
PIPE_SPAWN_DISTANCE = 200
MIN_PIPE_HEIGHT = 40

DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 600


@dataclass(frozen=True)
class Pipe:
    x: float
    gap_top: float
    scored: bool = False

    @property
    def gap_bottom(self) -> float:
        return self.gap_top + PIPE_GAP


@dataclass(frozen=True)
class FlappyState(Snapshot):
    bird_y: float
    rng: Rng
    bird_velocity: float = 0.0
    pipes: tuple[Pipe, ...] = ()
    score: int = 0
    started: bool = False
    terminal: bool = False
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


def new_game(rng: Rng, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> FlappyState:
    return FlappyState(
        bird_y=height / 2 - BIRD_SIZE / 2,
        rng=rng,
        width=width,
        height=height,
    )


def flap(state: FlappyState) -> FlappyState:
    if state.terminal:
        return state
    return state._copy_with(bird_velocity=FLAP_VELOCITY, started=True)


def collides(state: FlappyState) -> bool:
    """Bird touches the ceiling, the ground, or a pipe outside its gap."""
    top = state.bird_y
    bottom = state.bird_y + BIRD_SIZE
    if top <= 0 or bottom >= state.height:
        return True

    left, right = BIRD_X, BIRD_X + BIRD_SIZE
    for pipe in state.pipes:
        if right > pipe.x and left < pipe.x + PIPE_WIDTH:
            if top < pipe.gap_top or bottom > pipe.gap_bottom:
                return True
    return False


def _spawn_due(pipes: tuple[Pipe, ...], width: int) -> bool:
    return not pipes or pipes[0].x < width - PIPE_SPAWN_DISTANCE


def tick(state: FlappyState) -> FlappyState:
    """One animation frame; nothing moves until the first flap."""
    if not state.started or state.terminal:
        return state

    velocity = state.bird_velocity + GRAVITY
    bird_y = state.bird_y + velocity

    pipes = tuple(
        Pipe(pipe.x - PIPE_SPEED, pipe.gap_top, pipe.scored)
        for pipe in state.pipes
        if pipe.x - PIPE_SPEED + PIPE_WIDTH > 0
    )

    rng = state.rng
    if _spawn_due(pipes, state.width):
        upper = max(MIN_PIPE_HEIGHT, state.height - PIPE_GAP - MIN_PIPE_HEIGHT)
        gap_top, rng = rng.uniform(MIN_PIPE_HEIGHT, upper)
        pipes = (Pipe(float(state.width), gap_top),) + pipes

    score = state.score
    passed = []
    for pipe in pipes:
        if not pipe.scored and pipe.x + PIPE_WIDTH < BIRD_X:
            pipe = Pipe(pipe.x, pipe.gap_top, scored=True)
            score += 1
        passed.append(pipe)

    moved = state._copy_with(
        bird_y=bird_y,
        bird_velocity=velocity,
        pipes=tuple(passed),
        score=score,
        rng=rng,
    )
    return moved._copy_with(terminal=collides(moved))


def _handle_flap(state: FlappyState, payload: CommandPayload) -> CommandResult:
    return CommandResult.success_with_state(flap(state))


HANDLERS = {
    CommandType.FLAP: _handle_flap,
}

FLAP_KEYS = {" ", "arrowup", "w"}


def resolve_input(event: InputEvent) -> Command | None:
    if event.kind == EventKind.CLICK:
        return Command.simple(CommandType.FLAP)
    if event.kind == EventKind.KEY_DOWN and event.normalized_key in FLAP_KEYS:
        return Command.simple(CommandType.FLAP)
    return None


ENGINE = Engine(
    game_id="flappy-bird",
    new_game=new_game,
    handlers=HANDLERS,
    tick=tick,
    resolve_input=resolve_input,
)
