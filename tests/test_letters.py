"""
Tests for the per-letter ledger and its rankings.
"""
import pytest

from typeracer.attempt import Attempt
from typeracer.letters import LetterLedger


def type_with_pauses(attempt, clock, keys):
    """``keys`` is a list of (pause before the key, key)."""
    for pause, key in keys:
        clock.advance(pause)
        attempt.type_char(key)


def test_error_letters():
    attempt = Attempt("Hello world!")
    for key in "Hxllx wx":
        attempt.type_char(key)
    assert attempt.most_error_letters()[:2] == [("o", 2), ("e", 1)]


def test_slowest_letters(clock):
    attempt = Attempt("Hello world!", clock=clock)
    type_with_pauses(
        attempt,
        clock,
        [(0, "H"), (0.1, "e"), (0.1, "l"), (0.3, "l"), (0.25, "o"), (0, " "), (0, "w"), (0.25, "o")],
    )
    letters = attempt.slowest_letters()
    assert [letter for letter, _ in letters] == ["o", "l", "e", " ", "H", "w"]
    assert letters[0][1] == pytest.approx(0.25)
    assert letters[1][1] == pytest.approx(0.2)


def test_slowest_letters_retype(clock):
    attempt = Attempt("Hello", clock=clock)
    attempt.type_char("H")
    clock.advance(0.1)
    attempt.type_char("e")
    for _ in range(4):
        attempt.delete_char()
        attempt.type_char("e")
    clock.advance(0.05)
    attempt.type_char("l")

    letters = attempt.slowest_letters()
    assert [letter for letter, _ in letters] == ["e", "l", "H"]
    assert attempt.letters.get("e").count == 1


def test_wrong_key_is_charged_to_target_letter():
    attempt = Attempt("abc")
    attempt.type_char("z")
    assert "z" not in attempt.letters
    assert attempt.letters.get("a").errors == 1
    assert attempt.letters.get("a").count == 0


def test_errors_survive_correction():
    attempt = Attempt("abc")
    attempt.type_char("z")
    attempt.delete_char()
    attempt.type_char("a")
    assert attempt.letters.get("a").errors == 1
    assert attempt.letters.get("a").count == 1


def test_rankings_cover_every_typed_letter():
    attempt = Attempt("banana split")
    for key in "bxnaxa":
        attempt.type_char(key)
    expected = set("banana")
    assert {letter for letter, _ in attempt.slowest_letters()} == expected
    assert {letter for letter, _ in attempt.most_error_letters()} == expected


def test_ties_are_ordered_by_code_point():
    ledger = LetterLedger()
    for letter in "dbca":
        ledger.record_error(letter)
    ledger.record_correct("z", 0.0)
    assert ledger.most_errors() == [("a", 1), ("b", 1), ("c", 1), ("d", 1), ("z", 0)]
    assert ledger.slowest() == [("a", 0.0), ("b", 0.0), ("c", 0.0), ("d", 0.0), ("z", 0.0)]


def test_rankings_can_be_truncated():
    ledger = LetterLedger()
    ledger.record_correct("a", 1.0)
    ledger.record_correct("b", 3.0)
    ledger.record_correct("c", 2.0)
    assert ledger.slowest(2) == [("b", 3.0), ("c", 2.0)]
    assert len(ledger.most_errors(1)) == 1


def test_average_uses_only_counted_keystrokes():
    ledger = LetterLedger()
    ledger.record_correct("a", 1.0)
    ledger.record_correct("a", 3.0)
    assert ledger.get("a").average == pytest.approx(2.0)
    ledger.revert_correct("a")
    ledger.revert_correct("a")
    ledger.revert_correct("a")
    assert ledger.get("a").count == 0
    assert ledger.get("a").average == 0.0
