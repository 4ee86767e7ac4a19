"""
Wordle engine.

Guesses are marked with a two-pass, duplicate-safe evaluation: exact
matches consume secret letters first, then remaining guess letters are
marked present only while unconsumed copies of that letter remain.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from ...engine_core.command import Command, CommandPayload, CommandResult, CommandType, EventKind, InputEvent
from ...engine_core.contract import Engine
from ...engine_core.rng import Rng
from ...engine_core.state import Snapshot
from .words import WORD_LENGTH, is_valid_word, random_word

MAX_ATTEMPTS = 6
POINTS_PER_SPARE_ATTEMPT = 100


class LetterMark(Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


_MARK_RANK = {LetterMark.ABSENT: 0, LetterMark.PRESENT: 1, LetterMark.CORRECT: 2}


@dataclass(frozen=True)
class GuessResult:
    word: str
    marks: tuple[LetterMark, ...]

    @property
    def solved(self) -> bool:
        return all(mark == LetterMark.CORRECT for mark in self.marks)


@dataclass(frozen=True)
class WordleState(Snapshot):
    secret: str
    guesses: tuple[GuessResult, ...] = ()
    terminal: bool = False
    won: bool = False

    @property
    def attempts_used(self) -> int:
        return len(self.guesses)

    @property
    def score(self) -> int:
        """(7 - attempts) * 100 on a win, 0 otherwise."""
        if not self.won:
            return 0
        return (MAX_ATTEMPTS - self.attempts_used + 1) * POINTS_PER_SPARE_ATTEMPT


def new_game(rng: Rng) -> WordleState:
    secret, _ = random_word(rng)
    return WordleState(secret=secret)


def evaluate_guess(guess: str, secret: str) -> tuple[LetterMark, ...]:
    guess = guess.upper()
    secret = secret.upper()
    marks: list[LetterMark | None] = [None] * len(guess)
    pool = Counter()

    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            marks[i] = LetterMark.CORRECT
        else:
            pool[s] += 1

    for i, g in enumerate(guess):
        if marks[i] is not None:
            continue
        if pool[g] > 0:
            marks[i] = LetterMark.PRESENT
            pool[g] -= 1
        else:
            marks[i] = LetterMark.ABSENT

    return tuple(marks)


def validate_guess(word: str | None) -> str | None:
    """Returns an error message for an unacceptable guess, None if valid."""
    if word is None:
        return "A guess is required"
    if len(word) != WORD_LENGTH or not word.isalpha():
        return f"Guess must be exactly {WORD_LENGTH} letters"
    if not is_valid_word(word):
        return f"{word.upper()} is not in the word list"
    return None


def submit_guess(state: WordleState, word: str) -> WordleState:
    """Invalid guesses leave the state unchanged."""
    if state.terminal or validate_guess(word):
        return state
    result = GuessResult(word=word.upper(), marks=evaluate_guess(word, state.secret))
    guesses = state.guesses + (result,)
    won = result.solved
    return state._copy_with(
        guesses=guesses,
        won=won,
        terminal=won or len(guesses) >= MAX_ATTEMPTS,
    )


def letter_states(state: WordleState) -> dict[str, LetterMark]:
    """Best mark seen so far for each guessed letter (keyboard colouring)."""
    best: dict[str, LetterMark] = {}
    for guess in state.guesses:
        for letter, mark in zip(guess.word, guess.marks):
            if letter not in best or _MARK_RANK[mark] > _MARK_RANK[best[letter]]:
                best[letter] = mark
    return best


def _handle_submit_guess(state: WordleState, payload: CommandPayload) -> CommandResult:
    error = validate_guess(payload.word)
    if error:
        return CommandResult.failure(error, error_code="INVALID_GUESS")
    new_state = submit_guess(state, payload.word)
    return CommandResult.success_with_state(
        new_state,
        changes=[f"Guess {new_state.attempts_used}/{MAX_ATTEMPTS}: {payload.word.upper()}"],
    )


HANDLERS = {
    CommandType.SUBMIT_GUESS: _handle_submit_guess,
}


def resolve_input(event: InputEvent) -> Command | None:
    """Typing is buffered by the presentation layer; only whole words arrive."""
    if event.kind == EventKind.TEXT and event.text is not None:
        return Command.submit_guess(event.text.strip())
    return None


ENGINE = Engine(
    game_id="wordle",
    new_game=new_game,
    handlers=HANDLERS,
    resolve_input=resolve_input,
)
