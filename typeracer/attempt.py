from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Tuple

from .history import HistoryLog, HistoryLogError, HistoryRecord
from .letters import LetterLedger

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class EmptyTextError(ValueError):
    """An attempt needs at least one character of target text."""


# ---------------------------
# Segmentation
# ---------------------------

def text_parts(target: str, typed: str) -> List[str]:
    """
    Split ``target`` into display spans according to ``typed``.

    Spans alternate matched / mismatched, starting with matched (possibly
    empty). The second to last span runs up to the end of the typed range,
    the last one is everything not typed yet, so its first character is the
    next key to press. Joining the spans gives back ``target``.
    """
    parts: List[str] = []
    matching = True
    start = 0
    for pos, (got, expected) in enumerate(zip(typed, target)):
        if (got == expected) != matching:
            parts.append(target[start:pos])
            start = pos
            matching = not matching
    end = min(len(typed), len(target))
    parts.append(target[start:end])
    parts.append(target[end:])
    return parts


def scan_typed(target: str, typed: str) -> Tuple[int, float]:
    """Return (correct characters, completed word score) for ``typed``."""
    correct = 0
    words = 0.0
    word_len = 0
    word_ok = 0
    for got, expected in zip(typed, target):
        matched = got == expected
        if matched:
            correct += 1
        if expected.isalnum():
            word_len += 1
            word_ok += matched
        elif word_len:
            words += word_ok / word_len
            word_len = word_ok = 0
    # a word typed to its last letter counts even before its separator is typed
    end = len(typed)
    if word_len and (end >= len(target) or not target[end].isalnum()):
        words += word_ok / word_len
    return correct, words


# ---------------------------
# Attempt
# ---------------------------

class Attempt:
    """One practice run against a fixed text."""

    def __init__(
        self,
        target: str,
        history: Optional[HistoryLog] = None,
        clock: Clock = time.monotonic,
        wall_clock: Clock = time.time,
    ) -> None:
        if not target:
            raise EmptyTextError("target text must not be empty")
        self._target = target
        self._typed: List[str] = []
        self.history = history
        self.letters = LetterLedger()
        self._clock = clock
        self._wall_clock = wall_clock

        self.started_at: Optional[float] = None
        self.last_event_at: Optional[float] = None
        self.correct_count = 0
        self.completed_word_score = 0.0
        self.accuracy: Optional[float] = None
        self.saved = False

    @property
    def target(self) -> str:
        return self._target

    @property
    def typed(self) -> str:
        return "".join(self._typed)

    def is_complete(self) -> bool:
        return len(self._typed) == len(self._target)

    def type_char(self, c: str) -> None:
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        now = self._clock()
        if self.started_at is None:
            self.started_at = now
            self.last_event_at = now

        if len(self._typed) >= len(self._target):
            return
        self._typed.append(c)
        self._update_stats()

        letter = self._target[len(self._typed) - 1]
        if c == letter:
            self.letters.record_correct(letter, now - self.last_event_at)
        else:
            self.letters.record_error(letter)
        self.last_event_at = now

    def delete_char(self) -> None:
        if not self._typed:
            return
        c = self._typed.pop()
        letter = self._target[len(self._typed)]
        if c == letter:
            self.letters.revert_correct(letter)
        self._update_stats()

    def _update_stats(self) -> None:
        self.correct_count, self.completed_word_score = scan_typed(self._target, self.typed)
        if self._typed:
            self.accuracy = self.correct_count / len(self._typed)
        else:
            self.accuracy = None

    def _elapsed_minutes(self) -> Optional[float]:
        if self.started_at is None:
            return None
        minutes = (self._clock() - self.started_at) / 60.0
        return minutes if minutes > 0 else None

    def get_cpm(self) -> Optional[float]:
        minutes = self._elapsed_minutes()
        if minutes is None:
            return None
        return self.correct_count / minutes

    def get_wpm(self) -> Optional[float]:
        minutes = self._elapsed_minutes()
        if minutes is None:
            return None
        return self.completed_word_score / minutes

    def get_accuracy(self) -> Optional[float]:
        if not self._typed:
            return None
        return self.accuracy

    def text_parts(self) -> List[str]:
        return text_parts(self._target, self.typed)

    def slowest_letters(self, k: Optional[int] = None) -> List[Tuple[str, float]]:
        return self.letters.slowest(k)

    def most_error_letters(self, k: Optional[int] = None) -> List[Tuple[str, int]]:
        return self.letters.most_errors(k)

    def end_run(self) -> Optional[HistoryRecord]:
        """
        Save a summary of the run to the history log.

        Nothing is saved when any metric is still undefined. A failing log
        never interrupts the session; the error is only logged and ``saved``
        stays False.
        """
        accuracy = self.get_accuracy()
        wpm = self.get_wpm()
        cpm = self.get_cpm()
        if accuracy is None or wpm is None or cpm is None:
            logger.info("run not saved, metrics undefined")
            return None

        record = HistoryRecord(
            timestamp=int(self._wall_clock()),
            accuracy=accuracy,
            wpm=wpm,
            cpm=cpm,
        )
        if self.history is not None:
            try:
                self.history.append(record)
            except (HistoryLogError, OSError):
                logger.warning("could not save run %s", record, exc_info=True)
            else:
                self.saved = True
        return record
