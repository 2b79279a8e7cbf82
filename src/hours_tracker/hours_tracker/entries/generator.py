from __future__ import annotations

from datetime import date

from ..common.datetime_utils import days_in_month, weekday_name
from ..core.constants import FIRST_HALF_LAST_DAY
from ..core.enums import PeriodType
from .model import TimeEntry


def period_day_range(year: int, month: int, period: PeriodType) -> tuple[int, int]:
    """Inclusive (first, last) day numbers of a half-month period."""
    if period == PeriodType.FIRST_HALF:
        return 1, FIRST_HALF_LAST_DAY
    return FIRST_HALF_LAST_DAY + 1, days_in_month(year, month)


def generate_default_entries(year: int, month: int, period: PeriodType) -> list[TimeEntry]:
    """One blank row per day of the period, ordered by date.

    ``month`` is zero-based (0 = January).
    """
    first, last = period_day_range(year, month, period)
    entries: list[TimeEntry] = []
    for d in range(first, last + 1):
        work_date = date(year, month + 1, d)
        entries.append(TimeEntry(work_date=work_date, day=weekday_name(work_date)))
    return entries
