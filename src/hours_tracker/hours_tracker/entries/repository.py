from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PeriodStatus, PeriodType
from .model import TimeEntry


class EntryRepository(Protocol):
    """Repository interface for time entries and period lock status.

    Note (DIP): the tracker service depends on this interface, not on a concrete backend.
    """

    def load_entries(self, user_id: str, month_key: str, period: PeriodType) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def load_period_status(self, user_id: str, month_key: str, period: PeriodType) -> Optional[PeriodStatus]:
        raise NotImplementedError

    def save_entry(self, *, user_id: str, month_key: str, period: PeriodType, entry: TimeEntry) -> str:
        """Upsert by ``entry.entry_id``; returns the (possibly new) id."""

        raise NotImplementedError

    def toggle_period_lock(self, user_id: str, month_key: str, period: PeriodType, new_status: PeriodStatus) -> None:
        raise NotImplementedError
