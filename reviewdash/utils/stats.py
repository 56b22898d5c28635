"""
Small numeric helpers shared by the dashboard aggregations.

All of them accept empty input and return a neutral value instead of raising.
"""

from __future__ import annotations

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

HOUR_SECONDS = 60 * 60
DAY_SECONDS = 24 * HOUR_SECONDS


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round like a calculator: halves go up (toward +inf), not to even.
    round_half_up(2.5) == 3, round_half_up(-2.5) == -2.
    """
    quantum = Decimal(1).scaleb(-digits)
    # Negative halves move toward zero, which is toward +inf
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return float(Decimal(value).quantize(quantum, rounding=rounding))


def round_int(value: float) -> int:
    """round_half_up() to a whole number, returned as int."""
    return int(round_half_up(value))


def percent(part: int, whole: int) -> int:
    """Whole-number percentage of part/whole; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_int(part / whole * 100)


def mean(values: Sequence[float], digits: int = 2) -> float:
    """Arithmetic mean rounded to `digits`; 0 for an empty sequence."""
    if not values:
        return 0.0
    return round_half_up(sum(values) / len(values), digits)


def median(values: Iterable[float]) -> Optional[float]:
    """
    Textbook median. Returns None for empty input.
    Even-length input averages the two middle values.
    """
    ordered = sorted(values)
    if not ordered:
        return None
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]
