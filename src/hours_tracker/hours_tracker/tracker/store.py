from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_month_key
from ..core.enums import PeriodStatus
from ..core.exceptions import ValidationError
from ..entries.generator import generate_default_entries
from ..entries.model import PeriodData, PeriodKey, TimeEntry
from ..users.model import User


def merge_with_defaults(defaults: Sequence[TimeEntry], stored: Iterable[TimeEntry]) -> tuple[TimeEntry, ...]:
    """Overlay stored rows on the generated calendar rows by work date.

    Stored rows for days outside the period are dropped.
    """
    by_date = {e.work_date: e for e in stored}
    return tuple(by_date.get(d.work_date, d) for d in defaults)


class TrackerStore:
    """In-memory roster plus the user x month x period table.

    The only writer of tracker state; a lookup miss is filled with generated
    default rows and status ``open``.
    """

    def __init__(self):
        self._users: list[User] = []
        self._periods: dict[PeriodKey, PeriodData] = {}
        self.users_loaded = False

    # Roster

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    def replace_users(self, users: Iterable[User]) -> None:
        self._users = list(users)
        self.users_loaded = True

    def find_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        for u in self._users:
            if u.user_id == user_id:
                return u
        return None

    def add_user(self, user: User) -> None:
        if self.find_user(user.user_id):
            raise ValidationError(f"User {user.user_id} already exists")
        self._users.append(user)

    def rename_user(self, user_id: str, name: str) -> Optional[User]:
        for i, u in enumerate(self._users):
            if u.user_id == user_id:
                renamed = User(user_id=u.user_id, name=name, created_at=u.created_at)
                self._users[i] = renamed
                return renamed
        return None

    def remove_user(self, user_id: str) -> bool:
        before = len(self._users)
        self._users = [u for u in self._users if u.user_id != user_id]
        for key in [k for k in self._periods if k.user_id == user_id]:
            del self._periods[key]
        return len(self._users) != before

    # Periods

    def has_period(self, key: PeriodKey) -> bool:
        return key in self._periods

    def put_period(self, key: PeriodKey, data: PeriodData) -> None:
        dates = [e.work_date for e in data.entries]
        if dates != sorted(set(dates)):
            raise ValidationError("Entries must hold one row per day in date order")
        self._periods[key] = data

    def get_or_default(self, key: PeriodKey) -> PeriodData:
        data = self._periods.get(key)
        if data is None:
            year, month = parse_month_key(key.month_key)
            data = PeriodData(
                status=PeriodStatus.OPEN,
                entries=tuple(generate_default_entries(year, month, key.period)),
            )
            self._periods[key] = data
        return data
