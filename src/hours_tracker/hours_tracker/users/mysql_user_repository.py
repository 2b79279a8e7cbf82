from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_users(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, created_at
                FROM tracker_users
                ORDER BY created_at, id
                """
            )
            return [
                User(user_id=str(r["id"]), name=r["name"], created_at=r["created_at"])
                for r in fetchall(cur)
            ]

    def save_user(self, user: User) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tracker_users(id, name, created_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name)
                """,
                (user.user_id, user.name, user.created_at),
            )

    def delete_user(self, user_id: str) -> None:
        # time_entries and period_status rows go with ON DELETE CASCADE
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tracker_users WHERE id=%s", (user_id,))

    def rename_user(self, user_id: str, name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tracker_users SET name=%s WHERE id=%s", (name, user_id))
