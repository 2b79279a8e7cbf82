"""Example: drive the tracker service directly (no Flask).

Controllers are a thin layer; the rules live in TrackerService.
"""

import importlib

from config import get_settings_module

from src.hours_tracker.hours_tracker.container import build_container
from src.hours_tracker.hours_tracker.tracker.session import TrackerSession


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(backend="file", data_file=None, hours_mode=settings.HOURS_MODE)
    tracker = container.tracker_service

    session = TrackerSession(year=settings.TRACKER_YEAR, month=0)
    tracker.load(session)
    tracker.update_entry_field(session, 0, "start_time", "09:00")
    tracker.update_entry_field(session, 0, "hours_worked", "7.5")
    tracker.toggle_lock(session)
    print(tracker.period_view(session)["total_hours"], tracker.sync_status.value)


if __name__ == "__main__":
    main()
