from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .model import TimeEntry


def _clock_to_hours(value: str) -> float:
    hours_s, _, minutes_s = value.strip().partition(":")
    hours, minutes = int(hours_s), int(minutes_s or 0)
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"not a clock time: {value!r}")
    return hours + minutes / 60


def calculate_hours(start: str, end: str) -> float:
    """Elapsed hours between two ``HH:MM`` clock times, rounded to 2 decimals.

    An end time before the start time is treated as an overnight shift.
    """
    if not start or not end:
        return 0.0
    try:
        diff = _clock_to_hours(end) - _clock_to_hours(start)
    except ValueError:
        return 0.0
    if diff < 0:
        diff += 24
    return round(diff, 2)


def total_hours(entries: Iterable[TimeEntry]) -> float:
    return sum((e.hours_worked or 0.0) for e in entries)


def format_total_hours(hours: float) -> str:
    """Two decimals, ties rounded up (1.125 -> "1.13")."""
    return str(Decimal(str(hours)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
