"""Tests for guess evaluation, keyboard status and share text."""
import random

import pytest

from errors import InvalidInput
from game_logic import (
    ABSENT,
    CORRECT,
    PRESENT,
    absent_letters,
    evaluate_guess,
    normalize_guess,
    share_text,
)


@pytest.mark.parametrize(
    "guess, solution, expected",
    [
        ("LIGHT", "LIGHT", [CORRECT] * 5),
        ("NIGHT", "LIGHT", [ABSENT, CORRECT, CORRECT, CORRECT, CORRECT]),
        ("TRACE", "CRANE", [ABSENT, CORRECT, CORRECT, PRESENT, CORRECT]),
        ("BABEL", "ABBEY", [PRESENT, PRESENT, CORRECT, CORRECT, ABSENT]),
        ("SPEED", "ABIDE", [ABSENT, ABSENT, PRESENT, ABSENT, PRESENT]),
        ("LLAMA", "HELLO", [PRESENT, PRESENT, ABSENT, ABSENT, ABSENT]),
        ("MOUSE", "QUICK", [ABSENT, ABSENT, PRESENT, ABSENT, ABSENT]),
    ],
)
def test_evaluate_guess_examples(guess, solution, expected):
    assert evaluate_guess(guess, solution) == expected


def test_evaluate_guess_is_case_insensitive():
    assert evaluate_guess("night", "LIGHT") == evaluate_guess("NIGHT", "light")


def test_duplicate_letter_leftmost_claims_present():
    # One E in the solution, two misplaced Es in the guess
    feedback = evaluate_guess("EERIE", "OCEAN")
    assert feedback[0] == PRESENT
    assert feedback[1] == ABSENT
    assert feedback[4] == ABSENT


def test_correct_position_reserves_letter_before_present():
    # The E at position 4 is correct, so the earlier E has nothing left to claim
    assert evaluate_guess("EXXXE", "ABCDE") == [ABSENT, ABSENT, ABSENT, ABSENT, CORRECT]


def test_length_mismatch_rejected():
    with pytest.raises(InvalidInput):
        evaluate_guess("LIGHTS", "LIGHT")


def test_random_pairs_respect_properties():
    rng = random.Random(1234)
    letters = "ABCDE"
    for _ in range(500):
        guess = "".join(rng.choice(letters) for _ in range(5))
        solution = "".join(rng.choice(letters) for _ in range(5))
        feedback = evaluate_guess(guess, solution)

        assert len(feedback) == 5
        assert feedback == evaluate_guess(guess, solution)
        assert feedback.count(CORRECT) == sum(g == s for g, s in zip(guess, solution))
        # Never more marks for a letter than the solution holds
        for letter in set(guess):
            marked = sum(
                1 for g, f in zip(guess, feedback) if g == letter and f in (CORRECT, PRESENT)
            )
            assert marked <= solution.count(letter)


def test_normalize_guess():
    assert normalize_guess("  crane ") == "CRANE"
    with pytest.raises(InvalidInput):
        normalize_guess("cran")
    with pytest.raises(InvalidInput):
        normalize_guess("cr4ne")
    with pytest.raises(InvalidInput):
        normalize_guess(None)


def test_absent_letters_ignores_letters_found_elsewhere():
    guesses = [
        {"word": "SPEED", "feedback": evaluate_guess("SPEED", "ABIDE")},
        {"word": "CRANE", "feedback": evaluate_guess("CRANE", "ABIDE")},
    ]
    absent = absent_letters(guesses)
    # E was absent once in SPEED but present/correct in other positions
    assert "E" not in absent
    assert "D" not in absent
    assert {"S", "P", "C", "R", "N"} <= absent
    assert "A" not in absent


def test_absent_letters_empty_history():
    assert absent_letters([]) == set()


def test_share_text_won():
    guesses = [
        {"word": "NIGHT", "feedback": evaluate_guess("NIGHT", "LIGHT")},
        {"word": "LIGHT", "feedback": evaluate_guess("LIGHT", "LIGHT")},
    ]
    assert share_text(guesses, 1234) == "Wordle 1,234 2/6\n\n⬛🟩🟩🟩🟩\n🟩🟩🟩🟩🟩"


def test_share_text_lost_uses_x():
    guesses = [{"word": "NIGHT", "feedback": evaluate_guess("NIGHT", "LIGHT")}] * 6
    text = share_text(guesses, 940, title="Daily")
    assert text.splitlines()[0] == "Daily 940 X/6"
    assert len(text.splitlines()) == 8


def test_share_text_nothing_to_share():
    assert share_text([], 940) == ""
    assert share_text([{"word": "LIGHT", "feedback": [CORRECT] * 5}], None) == ""
