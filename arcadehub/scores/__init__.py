"""
Scores - Persisted high-score tables, ten per game.
"""

from .store import MAX_SCORES, HighScoreStore, ScoreEntry

__all__ = [
    "MAX_SCORES",
    "HighScoreStore",
    "ScoreEntry",
]
