from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from ..common.datetime_utils import parse_month_key
from ..core.constants import DEFAULT_AGENT_NAME, USER_ID_PREFIX
from ..core.enums import EntryField, PeriodStatus, PeriodType, SyncStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..entries.generator import generate_default_entries
from ..entries.hours import format_total_hours, total_hours
from ..entries.model import PeriodData, PeriodKey, TimeEntry
from ..entries.policies.base import HoursPolicy
from ..entries.policies.manual_policy import ManualHoursPolicy
from ..entries.repository import EntryRepository
from ..users.model import User
from ..users.repository import UserRepository
from .session import TrackerSession
from .store import TrackerStore, merge_with_defaults
from .sync import READ_FAILED, SyncGateway, SyncResult

logger = logging.getLogger(__name__)


def new_user_id() -> str:
    return f"{USER_ID_PREFIX}{uuid.uuid4().hex[:12]}"


class TrackerService:
    """Use cases of the hours tracker: edit rows, lock periods, manage the roster.

    Every mutation is applied to the in-memory store first and then pushed to
    the repositories through the sync gateway.
    """

    def __init__(
        self,
        users: UserRepository,
        entries: EntryRepository,
        *,
        store: Optional[TrackerStore] = None,
        sync: Optional[SyncGateway] = None,
        hours_policy: Optional[HoursPolicy] = None,
        id_factory: Callable[[], str] = new_user_id,
    ):
        self._users = users
        self._entries = entries
        self._store = store or TrackerStore()
        self._sync = sync or SyncGateway()
        self._policy = hours_policy or ManualHoursPolicy()
        self._new_id = id_factory

    @property
    def store(self) -> TrackerStore:
        return self._store

    @property
    def sync_status(self) -> SyncStatus:
        return self._sync.status

    @property
    def last_sync(self) -> Optional[SyncResult]:
        return self._sync.last_result

    # Roster / selection

    def load(self, session: TrackerSession) -> tuple[User, ...]:
        """Fill the roster on first use and make sure the selection points at a real user."""
        if not self._store.users_loaded:
            fetched = self._sync.fetch("load_users", self._users.load_users, default=READ_FAILED)
            if fetched is READ_FAILED:
                # Roster stays unloaded so the next call reads it again.
                return self._store.users
            users = list(fetched or [])
            if not users:
                default_user = User(user_id=self._new_id(), name=DEFAULT_AGENT_NAME.format(n=1))
                users = [default_user]
                self._sync.push("save_user", self._users.save_user, default_user)
            self._store.replace_users(users)

        if not self._store.find_user(session.selected_user_id):
            roster = self._store.users
            session.selected_user_id = roster[0].user_id if roster else None
        return self._store.users

    def list_users(self) -> tuple[User, ...]:
        return self._store.users

    def select_user(self, session: TrackerSession, user_id: str) -> bool:
        if not self._store.find_user(user_id):
            return False
        session.selected_user_id = user_id
        return True

    def select_month(self, session: TrackerSession, month: int) -> None:
        month = int(month)
        if not 0 <= month <= 11:
            raise ValidationError("Month must be between 0 and 11")
        session.month = month

    def select_period(self, session: TrackerSession, period: PeriodType | str) -> None:
        try:
            session.period = PeriodType(period)
        except ValueError:
            raise ValidationError(f"Unknown period: {period!r}")

    def add_user(self, session: TrackerSession, name: Optional[str] = None) -> User:
        if not session.is_admin:
            raise AuthorizationError("Only an admin can add users")

        name = (name or "").strip() or DEFAULT_AGENT_NAME.format(n=len(self._store.users) + 1)
        user = User(user_id=self._new_id(), name=name)
        self._store.add_user(user)
        session.selected_user_id = user.user_id
        logger.info("Added user %s (%s)", user.user_id, user.name)

        self._sync.push("save_user", self._users.save_user, user)
        return user

    def remove_user(self, session: TrackerSession, user_id: str, *, confirmed: bool) -> bool:
        if not session.is_admin:
            raise AuthorizationError("Only an admin can remove users")
        if not confirmed:
            return False
        if not self._store.remove_user(user_id):
            return False

        if session.selected_user_id == user_id:
            roster = self._store.users
            session.selected_user_id = roster[0].user_id if roster else None
        logger.info("Removed user %s and their period data", user_id)

        self._sync.push("delete_user", self._users.delete_user, user_id)
        return True

    def rename_user(self, session: TrackerSession, user_id: str, new_name: str) -> Optional[User]:
        user = self._store.rename_user(user_id, new_name)
        if user is None:
            return None
        self._sync.push("rename_user", self._users.rename_user, user_id, new_name)
        return user

    # Periods

    def _key(self, session: TrackerSession) -> Optional[PeriodKey]:
        if not self._store.find_user(session.selected_user_id):
            return None
        return PeriodKey(session.selected_user_id, session.month_key, session.period)

    def _ensure_period(self, key: PeriodKey) -> Optional[PeriodData]:
        """Cached period, or the stored one merged onto the calendar; None when the backend read fails."""
        if self._store.has_period(key):
            return self._store.get_or_default(key)

        stored = self._sync.fetch(
            "load_entries",
            self._entries.load_entries,
            key.user_id,
            key.month_key,
            key.period,
            default=READ_FAILED,
        )
        if stored is READ_FAILED:
            return None
        status = self._sync.fetch(
            "load_period_status",
            self._entries.load_period_status,
            key.user_id,
            key.month_key,
            key.period,
            default=READ_FAILED,
        )
        if status is READ_FAILED:
            return None

        year, month = parse_month_key(key.month_key)
        defaults = generate_default_entries(year, month, key.period)
        data = PeriodData(
            status=status or PeriodStatus.OPEN,
            entries=merge_with_defaults(defaults, stored or []),
        )
        self._store.put_period(key, data)
        return data

    def period_data(self, session: TrackerSession) -> Optional[PeriodData]:
        key = self._key(session)
        if key is None:
            return None
        return self._ensure_period(key)

    def can_edit(self, session: TrackerSession, data: Optional[PeriodData] = None) -> bool:
        data = data if data is not None else self.period_data(session)
        if data is None:
            return False
        return session.is_admin or not data.is_locked

    def update_entry_field(
        self,
        session: TrackerSession,
        row_index: int,
        field: EntryField | str,
        raw_value: str,
    ) -> Optional[TimeEntry]:
        key = self._key(session)
        if key is None:
            return None
        data = self._ensure_period(key)
        if data is None:
            return None
        if not 0 <= row_index < len(data.entries):
            return None

        try:
            field = EntryField(field)
        except ValueError:
            raise ValidationError(f"Unknown entry field: {field!r}")

        if not self.can_edit(session, data):
            raise AuthorizationError("This period is locked")

        entries = list(data.entries)
        updated = self._policy.apply(entries[row_index], field, raw_value)
        entries[row_index] = updated
        self._store.put_period(key, PeriodData(status=data.status, entries=tuple(entries)))

        self._push_entry(key, row_index, updated)
        return self._store.get_or_default(key).entries[row_index]

    def _push_entry(self, key: PeriodKey, row_index: int, entry: TimeEntry) -> SyncResult:
        result = self._sync.push(
            "save_entry",
            self._entries.save_entry,
            user_id=key.user_id,
            month_key=key.month_key,
            period=key.period,
            entry=entry,
        )
        if result.ok and result.value and result.value != entry.entry_id:
            current = self._store.get_or_default(key)
            entries = list(current.entries)
            if entries[row_index].work_date == entry.work_date:
                entries[row_index] = entries[row_index].with_value("entry_id", str(result.value))
                self._store.put_period(key, PeriodData(status=current.status, entries=tuple(entries)))
        return result

    def toggle_lock(self, session: TrackerSession) -> Optional[PeriodStatus]:
        key = self._key(session)
        if key is None:
            return None
        data = self._ensure_period(key)
        if data is None:
            return None

        if data.is_locked and not session.is_admin:
            raise AuthorizationError("Only an admin can unlock a period")

        new_status = data.status.toggled()
        self._store.put_period(key, PeriodData(status=new_status, entries=data.entries))
        logger.info("Period %s %s %s is now %s", key.user_id, key.month_key, key.period.value, new_status.value)

        self._sync.push(
            "toggle_period_lock",
            self._entries.toggle_period_lock,
            key.user_id,
            key.month_key,
            key.period,
            new_status,
        )
        return new_status

    def save_period(self, session: TrackerSession) -> list[SyncResult]:
        """Push every row of the active period plus its status."""
        key = self._key(session)
        if key is None:
            return []
        data = self._ensure_period(key)
        if data is None:
            return []

        results = [self._push_entry(key, i, e) for i, e in enumerate(data.entries)]
        results.append(
            self._sync.push(
                "toggle_period_lock",
                self._entries.toggle_period_lock,
                key.user_id,
                key.month_key,
                key.period,
                data.status,
            )
        )
        failed = [r for r in results if not r.ok]
        if failed:
            logger.warning("Saving period %s %s finished with %d failed call(s)", key.user_id, key.month_key, len(failed))
        return results

    def total_hours(self, session: TrackerSession) -> str:
        data = self.period_data(session)
        return format_total_hours(total_hours(data.entries) if data else 0.0)

    def period_view(self, session: TrackerSession) -> dict:
        data = self.period_data(session)
        user = self._store.find_user(session.selected_user_id)
        return {
            "user": user.to_dict() if user else None,
            "month": session.month,
            "year": session.year,
            "period": session.period.value,
            "status": data.status.value if data else None,
            "editable": self.can_edit(session, data),
            "hours_editable": self._policy.hours_editable,
            "entries": [e.to_dict() for e in data.entries] if data else [],
            "total_hours": format_total_hours(total_hours(data.entries) if data else 0.0),
            "sync_status": self.sync_status.value,
        }
