"""
Game catalog - what the hub lists on its home page.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class GameDefinition:
    game_id: str
    title: str
    description: str
    controls: str
    tick_interval_ms: int | None = None  # None: the game only moves on input


GAMES: tuple[GameDefinition, ...] = (
    GameDefinition(
        game_id="tetris",
        title="Tetris",
        description="Stack and clear lines with falling tetrominoes. Classic puzzle action!",
        controls="Arrows or WASD to move and rotate, Space to hard drop",
        tick_interval_ms=500,
    ),
    GameDefinition(
        game_id="flappy-bird",
        title="Flappy Bird",
        description="Tap to flap through pipes. Simple to learn, impossible to master.",
        controls="Space, Up or click to flap",
        tick_interval_ms=16,
    ),
    GameDefinition(
        game_id="2048",
        title="2048",
        description="Slide and merge tiles to reach 2048. A math puzzle classic.",
        controls="Arrows or WASD to slide",
    ),
    GameDefinition(
        game_id="wordle",
        title="Wordle",
        description="Guess the 5-letter word in 6 tries with color-coded hints.",
        controls="Type a word and press Enter",
    ),
    GameDefinition(
        game_id="minesweeper",
        title="Minesweeper",
        description="Uncover cells without hitting mines. Use logic to survive!",
        controls="Click to reveal, right-click to flag",
    ),
    GameDefinition(
        game_id="pinball",
        title="Pinball",
        description="Launch the ball and rack up points with flippers and bumpers.",
        controls="Space to launch, Left/Right or A/D to hold flippers",
        tick_interval_ms=16,
    ),
)

GAME_MAP = {game.game_id: game for game in GAMES}
GAME_IDS = tuple(GAME_MAP)


def get_game(game_id: str) -> GameDefinition | None:
    return GAME_MAP.get(game_id)
