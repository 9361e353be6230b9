"""Typing practice in the terminal, with per-letter stats and a speed trend."""

from .attempt import Attempt, EmptyTextError, text_parts
from .history import FileHistoryLog, HistoryLogError, HistoryRecord, MemoryHistoryLog
from .improvement import get_improvement, resample
from .letters import LetterLedger

__version__ = "0.1.0"

__all__ = [
    "Attempt",
    "EmptyTextError",
    "FileHistoryLog",
    "HistoryLogError",
    "HistoryRecord",
    "LetterLedger",
    "MemoryHistoryLog",
    "get_improvement",
    "resample",
    "text_parts",
]
