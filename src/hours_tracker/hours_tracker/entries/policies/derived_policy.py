from __future__ import annotations

from ...core.enums import EntryField
from ...core.exceptions import ValidationError
from ..hours import calculate_hours
from ..model import TimeEntry
from .base import HoursPolicy


class DerivedHoursPolicy(HoursPolicy):
    """Hours are read-only and recomputed from start/end times."""

    @property
    def hours_editable(self) -> bool:
        return False

    def apply(self, entry: TimeEntry, field: EntryField, raw_value: str) -> TimeEntry:
        if field == EntryField.HOURS_WORKED:
            raise ValidationError("Hours are computed from start and end times")

        updated = entry.with_value(field.value, raw_value)
        if field in (EntryField.START_TIME, EntryField.END_TIME):
            updated = updated.with_value(
                EntryField.HOURS_WORKED.value,
                calculate_hours(updated.start_time, updated.end_time),
            )
        return updated
