"""
Games module - The six engines and the catalog.

Each game exports an ENGINE record; ENGINES maps catalog ids to them.
"""

from ..engine_core.contract import Engine
from . import flappy_bird, game2048, minesweeper
from .catalog import GAME_IDS, GAMES, GameDefinition, get_game
from .pinball import ENGINE as PINBALL_ENGINE
from .tetris import ENGINE as TETRIS_ENGINE
from .wordle import ENGINE as WORDLE_ENGINE

ENGINES: dict[str, Engine] = {
    engine.game_id: engine
    for engine in (
        TETRIS_ENGINE,
        flappy_bird.ENGINE,
        game2048.ENGINE,
        WORDLE_ENGINE,
        minesweeper.ENGINE,
        PINBALL_ENGINE,
    )
}


def get_engine(game_id: str) -> Engine | None:
    return ENGINES.get(game_id)


__all__ = [
    "ENGINES",
    "GAME_IDS",
    "GAMES",
    "GameDefinition",
    "get_engine",
    "get_game",
]
