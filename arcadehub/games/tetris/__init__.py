"""
Tetris - falling tetrominoes, line clears at 100 points per line.
"""

from .engine import ENGINE, ActivePiece, TetrisState, new_game
from .tetrominoes import TETROMINOES, Tetromino, rotate_cw

__all__ = [
    "ENGINE",
    "ActivePiece",
    "TetrisState",
    "new_game",
    "TETROMINOES",
    "Tetromino",
    "rotate_cw",
]
