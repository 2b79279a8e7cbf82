from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_TRACKER_YEAR
from .core.enums import HoursMode
from .database.connection import DBConfig, DatabaseConnection
from .database.json_file_repository import JsonFileRepository
from .entries.factory import HoursPolicyFactory
from .entries.mysql_entry_repository import MySQLEntryRepository
from .entries.repository import EntryRepository
from .tracker.service import TrackerService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, ConfiguredCredentialStore

logger = logging.getLogger(__name__)

BACKEND_FILE = "file"
BACKEND_MYSQL = "mysql"


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    entries_repo: EntryRepository

    auth_service: AuthService
    tracker_service: TrackerService

    tracker_year: int = DEFAULT_TRACKER_YEAR


def build_container(
    *,
    backend: str = BACKEND_FILE,
    db_config: Optional[dict] = None,
    data_file: Optional[str] = None,
    hours_mode: HoursMode | str = HoursMode.MANUAL,
    admin_username: str = "",
    admin_password_hash: str = "",
    tracker_year: int = DEFAULT_TRACKER_YEAR,
) -> Container:
    if backend == BACKEND_MYSQL:
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        users_repo: UserRepository = MySQLUserRepository(conn)
        entries_repo: EntryRepository = MySQLEntryRepository(conn)
        logger.info("Using MySQL backend %s", conn.config.describe())
    elif backend == BACKEND_FILE:
        repo = JsonFileRepository(data_file)
        users_repo, entries_repo = repo, repo
        logger.info("Using file backend %s", data_file or "(in memory)")
    else:
        raise ValueError(f"Unknown TRACKER_BACKEND: {backend!r}")

    auth_service = AuthService(ConfiguredCredentialStore(admin_username, admin_password_hash))
    tracker_service = TrackerService(
        users_repo,
        entries_repo,
        hours_policy=HoursPolicyFactory().for_mode(hours_mode),
    )

    return Container(
        users_repo=users_repo,
        entries_repo=entries_repo,
        auth_service=auth_service,
        tracker_service=tracker_service,
        tracker_year=int(tracker_year),
    )
