from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..common.datetime_utils import month_key
from ..core.constants import DEFAULT_TRACKER_YEAR
from ..core.enums import PeriodType, Role


@dataclass
class TrackerSession:
    """Who is editing and which period is on screen.

    Passed explicitly to every tracker operation; the web layer keeps it in the Flask session.
    """

    role: Role = Role.AGENT
    year: int = DEFAULT_TRACKER_YEAR
    month: int = 0
    period: PeriodType = PeriodType.FIRST_HALF
    selected_user_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def month_key(self) -> str:
        return month_key(self.year, self.month)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["role"] = self.role.value
        data["period"] = self.period.value
        return data

    @classmethod
    def from_dict(cls, data: Optional[dict], *, default_year: int = DEFAULT_TRACKER_YEAR) -> "TrackerSession":
        data = data or {}
        return cls(
            role=Role(data.get("role", Role.AGENT.value)),
            year=int(data.get("year", default_year)),
            month=int(data.get("month", 0)),
            period=PeriodType(data.get("period", PeriodType.FIRST_HALF.value)),
            selected_user_id=data.get("selected_user_id") or None,
        )
