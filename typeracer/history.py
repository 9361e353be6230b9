from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

# plain decimal forms only, as written by to_line: no sign, inf, nan or underscores
_TIMESTAMP = re.compile(r"\d+\Z", re.ASCII)
_NUMBER = re.compile(r"\d+(\.\d+)?([eE][-+]?\d+)?\Z", re.ASCII)


class HistoryLogError(Exception):
    """The history log could not be read or written."""


@dataclass(frozen=True)
class HistoryRecord:
    """Summary of one finished run, one line in the history log."""

    timestamp: int
    accuracy: float
    wpm: float
    cpm: float

    def to_line(self) -> str:
        # repr() of a float is the shortest string that parses back exactly
        return f"{int(self.timestamp)} {self.accuracy!r} {self.wpm!r} {self.cpm!r}"

    @classmethod
    def from_line(cls, line: str) -> "HistoryRecord":
        fields = line.split(" ")
        if len(fields) != 4:
            raise HistoryLogError(f"expected 4 fields, got {len(fields)}: {line!r}")
        if not _TIMESTAMP.match(fields[0]) or not all(_NUMBER.match(f) for f in fields[1:]):
            raise HistoryLogError(f"malformed record {line!r}")
        record = cls(
            timestamp=int(fields[0]),
            accuracy=float(fields[1]),
            wpm=float(fields[2]),
            cpm=float(fields[3]),
        )
        if not all(math.isfinite(v) for v in (record.accuracy, record.wpm, record.cpm)):
            raise HistoryLogError(f"non-finite value in {line!r}")
        if not 0.0 <= record.accuracy <= 1.0:
            raise HistoryLogError(f"accuracy out of range in {line!r}")
        return record


class HistoryLog(Protocol):
    def append(self, record: HistoryRecord) -> None:
        ...

    def read_all(self) -> List[HistoryRecord]:
        ...


class FileHistoryLog:
    """
    Append-only text log, one record per line.

    Assumes a single writer: nothing here locks the file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def append(self, record: HistoryRecord) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(record.to_line() + "\n")
        except OSError as exc:
            raise HistoryLogError(f"cannot append to {self.path}") from exc
        logger.debug("appended %s to %s", record, self.path)

    def read_all(self) -> List[HistoryRecord]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise HistoryLogError(f"cannot read {self.path}") from exc
        # parse everything before returning anything
        return [HistoryRecord.from_line(line) for line in content.splitlines()]


class MemoryHistoryLog:
    """In-memory log with the same contract as FileHistoryLog."""

    def __init__(self, records: Optional[List[HistoryRecord]] = None) -> None:
        self.records: List[HistoryRecord] = list(records or [])

    def append(self, record: HistoryRecord) -> None:
        self.records.append(record)

    def read_all(self) -> List[HistoryRecord]:
        return list(self.records)
