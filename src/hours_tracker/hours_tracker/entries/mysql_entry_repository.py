from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import weekday_name
from ..core.enums import PeriodStatus, PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TimeEntry
from .repository import EntryRepository


class MySQLEntryRepository(EntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_entries(self, user_id: str, month_key: str, period: PeriodType) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, work_date, hours, comment, start_time, end_time
                FROM time_entries
                WHERE user_id=%s AND month=%s AND period=%s
                ORDER BY work_date
                """,
                (user_id, month_key, period.value),
            )
            out: list[TimeEntry] = []
            for r in fetchall(cur):
                out.append(
                    TimeEntry(
                        entry_id=str(r["id"]),
                        work_date=r["work_date"],
                        day=weekday_name(r["work_date"]),
                        start_time=r.get("start_time") or "",
                        end_time=r.get("end_time") or "",
                        comments=r.get("comment") or "",
                        hours_worked=float(r.get("hours") or 0),
                    )
                )
            return out

    def load_period_status(self, user_id: str, month_key: str, period: PeriodType) -> Optional[PeriodStatus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status FROM period_status WHERE user_id=%s AND month=%s AND period=%s",
                (user_id, month_key, period.value),
            )
            row = fetchone(cur)
            return PeriodStatus(row["status"]) if row else None

    def save_entry(self, *, user_id: str, month_key: str, period: PeriodType, entry: TimeEntry) -> str:
        params = (
            entry.work_date,
            entry.hours_worked,
            entry.comments,
            entry.start_time,
            entry.end_time,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if entry.entry_id:
                cur.execute(
                    """
                    UPDATE time_entries
                    SET work_date=%s, hours=%s, comment=%s, start_time=%s, end_time=%s
                    WHERE id=%s
                    """,
                    params + (int(entry.entry_id),),
                )
                if cur.rowcount > 0:
                    return entry.entry_id

            # Unique on (user_id, month, period, work_date): one row per calendar day.
            cur.execute(
                """
                INSERT INTO time_entries(user_id, month, period, work_date, hours, comment, start_time, end_time)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    hours=VALUES(hours),
                    comment=VALUES(comment),
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time)
                """,
                (user_id, month_key, period.value) + params,
            )
            return str(cur.lastrowid)

    def toggle_period_lock(self, user_id: str, month_key: str, period: PeriodType, new_status: PeriodStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO period_status(user_id, month, period, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (user_id, month_key, period.value, new_status.value),
            )
