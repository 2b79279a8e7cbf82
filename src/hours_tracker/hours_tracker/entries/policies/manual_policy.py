from __future__ import annotations

from ...common.validators import parse_hours
from ...core.enums import EntryField
from ..model import TimeEntry
from .base import HoursPolicy


class ManualHoursPolicy(HoursPolicy):
    """Hours are typed in directly; clock times are informational only."""

    @property
    def hours_editable(self) -> bool:
        return True

    def apply(self, entry: TimeEntry, field: EntryField, raw_value: str) -> TimeEntry:
        if field == EntryField.HOURS_WORKED:
            return entry.with_value(field.value, parse_hours(raw_value))
        return entry.with_value(field.value, raw_value)
