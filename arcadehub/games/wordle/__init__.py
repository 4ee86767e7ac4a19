"""
Wordle - guess the five-letter word in six tries.
"""

from .engine import (
    ENGINE,
    MAX_ATTEMPTS,
    GuessResult,
    LetterMark,
    WordleState,
    evaluate_guess,
    letter_states,
    new_game,
    submit_guess,
)
from .words import WORD_LENGTH, WORDS, is_valid_word, random_word

__all__ = [
    "ENGINE",
    "MAX_ATTEMPTS",
    "GuessResult",
    "LetterMark",
    "WordleState",
    "evaluate_guess",
    "letter_states",
    "new_game",
    "submit_guess",
    "WORD_LENGTH",
    "WORDS",
    "is_valid_word",
    "random_word",
]
