"""
Fit the history of past runs into a fixed-size plot.

``resample`` maps ``n`` values onto ``scale_x`` columns of height
``scale_y``: values are taken as-is when ``n == scale_x``, linearly
interpolated when there are fewer values than columns, and averaged over
neighbouring values when there are more.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .history import HistoryLog, HistoryLogError

logger = logging.getLogger(__name__)


def _position(i: int, scale_x: int, n: int) -> float:
    return i / (scale_x - 1) * (n - 1)


def _bucket_value(values: Sequence[float], i: int, scale_x: int) -> float:
    n = len(values)
    if n == scale_x:
        return values[i]
    if n < scale_x:
        f = _position(i, scale_x, n)
        lo, hi = math.floor(f), math.ceil(f)
        weight = f - lo
        return (1.0 - weight) * values[lo] + weight * values[hi]
    lo = math.floor(_position(max(i - 1, 0), scale_x, n))
    hi = math.ceil(_position(min(i + 1, scale_x - 1), scale_x, n))
    hi = min(hi, n - 1)
    window = values[lo:hi + 1]
    return sum(window) / len(window)


def _scale(value: float, max_value: float, scale_y: int) -> int:
    height = math.floor(value / max_value * scale_y)
    return min(max(height, 0), scale_y)


def resample(values: Sequence[float], scale_x: int, scale_y: int) -> Optional[List[int]]:
    """
    Return ``scale_x`` heights in ``[0, scale_y]``, or None without data.

    Non-finite values are ignored.
    """
    if scale_x < 1:
        raise ValueError(f"scale_x must be at least 1, got {scale_x}")
    if scale_y < 0:
        raise ValueError(f"scale_y must not be negative, got {scale_y}")
    values = [v for v in values if math.isfinite(v)]
    if not values:
        return None

    max_value = max(values)
    if max_value <= 0:
        return [0] * scale_x
    if scale_x == 1:
        return [_scale(values[-1], max_value, scale_y)]

    return [
        _scale(_bucket_value(values, i, scale_x), max_value, scale_y)
        for i in range(scale_x)
    ]


def get_improvement(history: HistoryLog, scale_x: int, scale_y: int) -> Optional[List[int]]:
    """CPM trend of all saved runs, or None when the log has nothing usable."""
    try:
        records = history.read_all()
    except HistoryLogError:
        logger.info("no usable history", exc_info=True)
        return None
    return resample([record.cpm for record in records], scale_x, scale_y)
