from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import format_display_date
from ..core.enums import PeriodStatus, PeriodType


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one calendar day of a payroll period."""

    work_date: date
    day: str
    start_time: str = ""
    end_time: str = ""
    comments: str = ""
    hours_worked: float = 0.0
    entry_id: Optional[str] = None

    @property
    def display_date(self) -> str:
        return format_display_date(self.work_date)

    def with_value(self, field_name: str, value: Any) -> "TimeEntry":
        return replace(self, **{field_name: value})

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "date": self.display_date,
            "work_date": self.work_date.isoformat(),
            "day": self.day,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "comments": self.comments,
            "hours_worked": self.hours_worked,
        }


@dataclass(frozen=True)
class PeriodData:
    status: PeriodStatus
    entries: tuple[TimeEntry, ...] = field(default_factory=tuple)

    @property
    def is_locked(self) -> bool:
        return self.status == PeriodStatus.LOCKED


@dataclass(frozen=True)
class PeriodKey:
    """Row key of the tracker table: user x month x period."""

    user_id: str
    month_key: str
    period: PeriodType
