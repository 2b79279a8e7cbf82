from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from ..common.datetime_utils import weekday_name
from ..core.enums import PeriodStatus, PeriodType
from ..core.exceptions import PersistenceError
from ..entries.model import TimeEntry
from ..users.model import User

logger = logging.getLogger(__name__)


class JsonFileRepository:
    """User and entry repository kept in one JSON document.

    Stands in for browser local storage: everything is read once and the whole
    document is rewritten after each change. Without a path it stays in memory.
    """

    def __init__(self, path: Optional[Path | str] = None):
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._doc: dict[str, Any] = {"users": [], "entries": [], "periods": [], "next_entry_id": 1}
        if self._path and self._path.exists():
            self._doc.update(self._read())
            logger.info("Loaded tracker data from %s (%d users)", self._path, len(self._doc["users"]))

    def _read(self) -> dict:
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read tracker data from {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"Tracker data in {self._path} is not a JSON object")
        return data

    def _flush(self) -> None:
        if not self._path:
            return
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(self._doc, fh, indent=2, ensure_ascii=False)
            tmp.replace(self._path)
        except OSError as e:
            raise PersistenceError(f"Cannot write tracker data to {self._path}: {e}") from e

    # UserRepository

    def load_users(self) -> Sequence[User]:
        return [
            User(user_id=u["id"], name=u["name"], created_at=datetime.fromisoformat(u["created_at"]))
            for u in self._doc["users"]
        ]

    def save_user(self, user: User) -> None:
        with self._lock:
            row = {"id": user.user_id, "name": user.name, "created_at": user.created_at.isoformat(timespec="seconds")}
            users = self._doc["users"]
            for i, u in enumerate(users):
                if u["id"] == user.user_id:
                    users[i] = row
                    break
            else:
                users.append(row)
            self._flush()

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            self._doc["users"] = [u for u in self._doc["users"] if u["id"] != user_id]
            self._doc["entries"] = [e for e in self._doc["entries"] if e["user_id"] != user_id]
            self._doc["periods"] = [p for p in self._doc["periods"] if p["user_id"] != user_id]
            self._flush()

    def rename_user(self, user_id: str, name: str) -> None:
        with self._lock:
            for u in self._doc["users"]:
                if u["id"] == user_id:
                    u["name"] = name
                    break
            self._flush()

    # EntryRepository

    def load_entries(self, user_id: str, month_key: str, period: PeriodType) -> Sequence[TimeEntry]:
        rows = [
            e
            for e in self._doc["entries"]
            if e["user_id"] == user_id and e["month"] == month_key and e["period"] == period.value
        ]
        rows.sort(key=lambda e: e["work_date"])
        out: list[TimeEntry] = []
        for r in rows:
            work_date = date.fromisoformat(r["work_date"])
            out.append(
                TimeEntry(
                    entry_id=r["id"],
                    work_date=work_date,
                    day=weekday_name(work_date),
                    start_time=r.get("start_time") or "",
                    end_time=r.get("end_time") or "",
                    comments=r.get("comment") or "",
                    hours_worked=float(r.get("hours") or 0),
                )
            )
        return out

    def load_period_status(self, user_id: str, month_key: str, period: PeriodType) -> Optional[PeriodStatus]:
        for p in self._doc["periods"]:
            if p["user_id"] == user_id and p["month"] == month_key and p["period"] == period.value:
                return PeriodStatus(p["status"])
        return None

    def save_entry(self, *, user_id: str, month_key: str, period: PeriodType, entry: TimeEntry) -> str:
        with self._lock:
            rows = self._doc["entries"]
            existing = None
            for r in rows:
                if entry.entry_id and r["id"] == entry.entry_id:
                    existing = r
                    break
                if (
                    r["user_id"] == user_id
                    and r["month"] == month_key
                    and r["period"] == period.value
                    and r["work_date"] == entry.work_date.isoformat()
                ):
                    existing = r
                    break

            if existing is None:
                existing = {"id": f"e-{self._doc['next_entry_id']}"}
                self._doc["next_entry_id"] += 1
                rows.append(existing)

            existing.update(
                {
                    "user_id": user_id,
                    "work_date": entry.work_date.isoformat(),
                    "hours": entry.hours_worked,
                    "comment": entry.comments,
                    "start_time": entry.start_time,
                    "end_time": entry.end_time,
                    "period": period.value,
                    "month": month_key,
                }
            )
            self._flush()
            return existing["id"]

    def toggle_period_lock(self, user_id: str, month_key: str, period: PeriodType, new_status: PeriodStatus) -> None:
        with self._lock:
            for p in self._doc["periods"]:
                if p["user_id"] == user_id and p["month"] == month_key and p["period"] == period.value:
                    p["status"] = new_status.value
                    break
            else:
                self._doc["periods"].append(
                    {"user_id": user_id, "month": month_key, "period": period.value, "status": new_status.value}
                )
            self._flush()
