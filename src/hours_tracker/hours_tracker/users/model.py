from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..common.datetime_utils import now_local


@dataclass(frozen=True)
class User:
    """Domain entity: a tracked teammate on the roster.

    Note: plain data object, no DB access here.
    """

    user_id: str
    name: str
    created_at: datetime = field(default_factory=now_local)

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "created_at": self.created_at.isoformat(timespec="seconds")}
