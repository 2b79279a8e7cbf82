from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claim used for permission checks."""

    ADMIN = "admin"
    AGENT = "agent"


class PeriodType(str, Enum):
    """Half-month payroll window."""

    FIRST_HALF = "FIRST_HALF"
    SECOND_HALF = "SECOND_HALF"


class PeriodStatus(str, Enum):
    OPEN = "open"
    LOCKED = "locked"

    def toggled(self) -> "PeriodStatus":
        return PeriodStatus.LOCKED if self is PeriodStatus.OPEN else PeriodStatus.OPEN


class EntryField(str, Enum):
    """Editable columns of a time entry row."""

    START_TIME = "start_time"
    END_TIME = "end_time"
    COMMENTS = "comments"
    HOURS_WORKED = "hours_worked"


class HoursMode(str, Enum):
    MANUAL = "manual"
    DERIVED = "derived"


class SyncStatus(str, Enum):
    IDLE = "idle"
    SYNCED = "synced"
    FAILED = "failed"
