from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.constants import DAYS_OF_WEEK, MONTH_NAMES


def days_in_month(year: int, month: int) -> int:
    """Number of days in a zero-based ``month`` of ``year``."""
    return calendar.monthrange(year, month + 1)[1]


def month_key(year: int, month: int) -> str:
    """Storage key for a month, e.g. ``2026-0`` for January 2026."""
    return f"{year}-{month}"


def parse_month_key(value: str) -> tuple[int, int]:
    year_s, _, month_s = value.partition("-")
    year, month = int(year_s), int(month_s)
    if not 0 <= month <= 11:
        raise ValueError(f"Invalid month key: {value!r}")
    return year, month


def weekday_name(day: date) -> str:
    # date.weekday() is Monday=0; the table starts on Sunday.
    return DAYS_OF_WEEK[(day.weekday() + 1) % 7]


def format_display_date(day: date) -> str:
    """Locale-style ``Month Day, Year`` (``January 5, 2026``)."""
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
