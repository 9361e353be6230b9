from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass
class LetterInfo:
    duration: float = 0.0  # seconds spent on correct keystrokes
    count: int = 0
    errors: int = 0

    @property
    def average(self) -> float:
        if self.count == 0:
            return 0.0
        return self.duration / self.count


class LetterLedger:
    """
    Per-letter timing and error totals for one attempt.

    Entries are keyed by the target letter, not the key that was pressed.
    Rankings break ties by ascending code point so results are stable.
    """

    def __init__(self) -> None:
        self._letters: Dict[str, LetterInfo] = {}

    def __contains__(self, letter: str) -> bool:
        return letter in self._letters

    def __len__(self) -> int:
        return len(self._letters)

    def get(self, letter: str) -> Optional[LetterInfo]:
        return self._letters.get(letter)

    def _entry(self, letter: str) -> LetterInfo:
        info = self._letters.get(letter)
        if info is None:
            info = self._letters[letter] = LetterInfo()
        return info

    def record_correct(self, letter: str, seconds: float) -> None:
        info = self._entry(letter)
        info.count += 1
        info.duration += max(0.0, seconds)

    def record_error(self, letter: str) -> None:
        self._entry(letter).errors += 1

    def revert_correct(self, letter: str) -> None:
        # duration stays: latency reflects forward progress only
        info = self._letters.get(letter)
        if info is not None and info.count > 0:
            info.count -= 1

    def slowest(self, k: Optional[int] = None) -> List[Tuple[str, float]]:
        ranked = sorted(
            ((letter, info.average) for letter, info in self._letters.items()),
            key=lambda item: (-item[1], item[0]),
        )
        return ranked if k is None else ranked[:k]

    def most_errors(self, k: Optional[int] = None) -> List[Tuple[str, int]]:
        ranked = sorted(
            ((letter, info.errors) for letter, info in self._letters.items()),
            key=lambda item: (-item[1], item[0]),
        )
        return ranked if k is None else ranked[:k]
