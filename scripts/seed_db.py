from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hours_tracker.hours_tracker.database.bootstrap import ensure_default_roster
from src.hours_tracker.hours_tracker.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    added = ensure_default_roster(db_config)
    target = DBConfig.from_dict(db_config).describe()
    print(f"OK: Seeded default roster -> {target}" if added else f"OK: Roster already present -> {target}")


if __name__ == "__main__":
    main()
