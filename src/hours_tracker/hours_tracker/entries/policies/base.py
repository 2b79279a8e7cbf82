from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import EntryField
from ..model import TimeEntry


class HoursPolicy(ABC):
    """Strategy Pattern: how an edited cell turns into a new entry row."""

    @abstractmethod
    def apply(self, entry: TimeEntry, field: EntryField, raw_value: str) -> TimeEntry:
        raise NotImplementedError

    @property
    @abstractmethod
    def hours_editable(self) -> bool:
        raise NotImplementedError
