"""
Tests for the Wordle engine.
"""

import pytest

from ..engine_core.command import Command, CommandType, EventKind, InputEvent
from ..engine_core.reducer import apply_command
from ..engine_core.rng import Rng
from ..games.wordle import (
    ENGINE,
    MAX_ATTEMPTS,
    WORDS,
    LetterMark,
    WordleState,
    evaluate_guess,
    is_valid_word,
    letter_states,
    new_game,
    submit_guess,
)

C, P, A = LetterMark.CORRECT, LetterMark.PRESENT, LetterMark.ABSENT


class TestWordList:
    def test_all_words_five_letters(self):
        assert all(len(word) == 5 and word.isalpha() and word.isupper() for word in WORDS)

    def test_no_duplicates(self):
        assert len(set(WORDS)) == len(WORDS)

    def test_lookup_case_insensitive(self):
        assert is_valid_word("crane")
        assert not is_valid_word("zzzzz")

    def test_secret_from_list(self):
        for seed in range(10):
            assert new_game(Rng(seed)).secret in WORDS


class TestEvaluate:
    """Tests for duplicate-safe marking."""

    def test_exact_match(self):
        assert evaluate_guess("CRANE", "CRANE") == (C, C, C, C, C)

    def test_present_and_absent(self):
        assert evaluate_guess("SPEED", "ERASE") == (P, A, P, P, A)

    def test_correct_consumes_before_present(self):
        """The second L is correct, so the first has no copy left to be present."""
        assert evaluate_guess("LEVEL", "STEEL") == (A, P, A, C, C)

    def test_extra_copies_absent(self):
        assert evaluate_guess("SHEEP", "STEEL") == (C, A, C, C, A)

    def test_case_insensitive(self):
        assert evaluate_guess("crane", "CRANE") == (C, C, C, C, C)


class TestSubmitGuess:
    """Tests for guesses, winning and losing."""

    def test_win_on_first_guess(self):
        state = submit_guess(WordleState(secret="CRANE"), "crane")
        assert state.won
        assert state.terminal
        assert state.score == 600

    def test_score_by_attempts(self):
        state = WordleState(secret="CRANE")
        for word in ("APPLE", "ABOUT", "CRANE"):
            state = submit_guess(state, word)
        assert state.attempts_used == 3
        assert state.score == 400

    def test_loss_after_six_guesses(self):
        state = WordleState(secret="CRANE")
        for _ in range(MAX_ATTEMPTS):
            state = submit_guess(state, "APPLE")
        assert state.terminal
        assert not state.won
        assert state.score == 0

    def test_not_over_before_six(self):
        state = WordleState(secret="CRANE")
        for _ in range(MAX_ATTEMPTS - 1):
            state = submit_guess(state, "APPLE")
        assert not state.terminal

    def test_invalid_guess_leaves_state(self):
        state = WordleState(secret="CRANE")
        assert submit_guess(state, "HELLO") is state
        assert submit_guess(state, "ABC") is state

    def test_guesses_stored_upper_case(self):
        state = submit_guess(WordleState(secret="CRANE"), "apple")
        assert state.guesses[0].word == "APPLE"


class TestHandler:
    """Tests for the SUBMIT_GUESS handler."""

    @pytest.mark.parametrize("word", ["HELLO", "ABC", "AB1DE", "TOOLONG"])
    def test_rejected(self, word):
        state = WordleState(secret="CRANE")
        result = apply_command(ENGINE, state, Command.submit_guess(word))
        assert not result.success
        assert result.error_code == "INVALID_GUESS"
        assert result.new_state is None

    def test_missing_word(self):
        result = apply_command(ENGINE, WordleState(secret="CRANE"), Command.simple(CommandType.SUBMIT_GUESS))
        assert result.error_code == "INVALID_GUESS"

    def test_accepted(self):
        result = apply_command(ENGINE, WordleState(secret="CRANE"), Command.submit_guess("apple"))
        assert result.success
        assert result.changes == ["Guess 1/6: APPLE"]

    def test_rejected_after_game_over(self):
        state = submit_guess(WordleState(secret="CRANE"), "CRANE")
        result = apply_command(ENGINE, state, Command.submit_guess("APPLE"))
        assert result.error_code == "GAME_OVER"


class TestLetterStates:
    def test_best_mark_wins(self):
        state = WordleState(secret="ERASE")
        state = submit_guess(state, "SPEED")
        marks = letter_states(state)
        assert marks["S"] == P
        assert marks["P"] == A
        assert marks["E"] == P

        state = submit_guess(state, "ERASE")
        assert letter_states(state)["E"] == C


class TestInput:
    def test_text_submits_guess(self):
        command = ENGINE.resolve_input(InputEvent(EventKind.TEXT, text=" crane "))
        assert command == Command.submit_guess("crane")

    def test_keys_ignored(self):
        assert ENGINE.resolve_input(InputEvent(EventKind.KEY_DOWN, key="Enter")) is None
