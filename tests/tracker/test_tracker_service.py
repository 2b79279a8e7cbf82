from __future__ import annotations

import pytest

from src.hours_tracker.hours_tracker.core.enums import PeriodStatus, PeriodType, Role, SyncStatus
from src.hours_tracker.hours_tracker.core.exceptions import AuthorizationError, PersistenceError, ValidationError
from src.hours_tracker.hours_tracker.database.json_file_repository import JsonFileRepository
from src.hours_tracker.hours_tracker.entries.model import PeriodKey
from src.hours_tracker.hours_tracker.entries.policies.derived_policy import DerivedHoursPolicy
from src.hours_tracker.hours_tracker.tracker.service import TrackerService
from src.hours_tracker.hours_tracker.tracker.session import TrackerSession
from src.hours_tracker.hours_tracker.users.model import User


class UnreadableRepository(JsonFileRepository):
    """Shares another repository's documents; reads fail while ``down`` is set."""

    def __init__(self, source: JsonFileRepository):
        super().__init__()
        self._doc = source._doc
        self.down = True

    def _check(self):
        if self.down:
            raise PersistenceError("database unavailable")

    def load_users(self):
        self._check()
        return super().load_users()

    def load_entries(self, *args):
        self._check()
        return super().load_entries(*args)

    def load_period_status(self, *args):
        self._check()
        return super().load_period_status(*args)


class BrokenEntries(JsonFileRepository):
    """Reads work, every write fails."""

    def save_entry(self, **kwargs):
        raise PersistenceError("database unavailable")

    def toggle_period_lock(self, *args):
        raise PersistenceError("database unavailable")


def test_load_creates_default_agent(tracker, repo, agent_session):
    users = tracker.list_users()

    assert [u.name for u in users] == ["Agent 1"]
    assert agent_session.selected_user_id == "u-1"
    assert [u.user_id for u in repo.load_users()] == ["u-1"]


def test_load_selects_first_existing_user(repo, id_factory):
    tracker = TrackerService(repo, repo, id_factory=id_factory)
    admin = TrackerSession(role=Role.ADMIN)
    tracker.load(admin)
    tracker.add_user(admin, "Sam")

    fresh = TrackerService(repo, repo)
    session = TrackerSession(selected_user_id="gone")
    fresh.load(session)

    assert [u.name for u in fresh.list_users()] == ["Agent 1", "Sam"]
    assert session.selected_user_id == "u-1"


def test_update_hours_field(tracker, agent_session):
    assert tracker.update_entry_field(agent_session, 0, "hours_worked", "").hours_worked == 0
    assert tracker.update_entry_field(agent_session, 1, "hours_worked", "7.5").hours_worked == 7.5
    assert tracker.update_entry_field(agent_session, 2, "hours_worked", "lots").hours_worked == 0

    assert tracker.total_hours(agent_session) == "7.50"


def test_update_text_field_is_stored_raw(tracker, agent_session):
    entry = tracker.update_entry_field(agent_session, 4, "comments", " sick day ")

    assert entry.comments == " sick day "
    assert tracker.period_data(agent_session).entries[4].comments == " sick day "
    assert tracker.period_data(agent_session).entries[3].comments == ""


def test_update_is_persisted_with_new_id(tracker, repo, agent_session):
    entry = tracker.update_entry_field(agent_session, 0, "start_time", "09:00")

    assert entry.entry_id is not None
    stored = repo.load_entries("u-1", "2026-0", PeriodType.FIRST_HALF)
    assert [(e.entry_id, e.start_time) for e in stored] == [(entry.entry_id, "09:00")]

    again = tracker.update_entry_field(agent_session, 0, "end_time", "17:00")
    assert again.entry_id == entry.entry_id
    assert len(repo.load_entries("u-1", "2026-0", PeriodType.FIRST_HALF)) == 1


def test_update_without_selection_is_noop(repo):
    tracker = TrackerService(repo, repo)
    tracker.store.replace_users([])
    session = TrackerSession()

    assert tracker.update_entry_field(session, 0, "comments", "x") is None
    assert tracker.toggle_lock(session) is None
    assert tracker.period_data(session) is None
    assert tracker.total_hours(session) == "0.00"


@pytest.mark.parametrize("row", [-1, 15, 99])
def test_update_out_of_range_is_noop(tracker, agent_session, row):
    assert tracker.update_entry_field(agent_session, row, "comments", "x") is None


def test_update_unknown_field_raises(tracker, agent_session):
    with pytest.raises(ValidationError):
        tracker.update_entry_field(agent_session, 0, "work_date", "2026-01-01")


def test_agent_cannot_edit_locked_period(tracker, agent_session):
    tracker.toggle_lock(agent_session)

    with pytest.raises(AuthorizationError):
        tracker.update_entry_field(agent_session, 0, "hours_worked", "8")
    assert tracker.can_edit(agent_session) is False


def test_admin_can_edit_locked_period(tracker, admin_session):
    tracker.toggle_lock(admin_session)

    entry = tracker.update_entry_field(admin_session, 0, "hours_worked", "8")
    assert entry.hours_worked == 8.0
    assert tracker.can_edit(admin_session) is True


def test_toggle_lock_rules(tracker, repo, agent_session):
    assert tracker.toggle_lock(agent_session) == PeriodStatus.LOCKED
    assert repo.load_period_status("u-1", "2026-0", PeriodType.FIRST_HALF) == PeriodStatus.LOCKED

    with pytest.raises(AuthorizationError):
        tracker.toggle_lock(agent_session)
    assert tracker.period_data(agent_session).status == PeriodStatus.LOCKED

    admin = TrackerSession(role=Role.ADMIN, selected_user_id=agent_session.selected_user_id)
    assert tracker.toggle_lock(admin) == PeriodStatus.OPEN
    assert tracker.toggle_lock(admin) == PeriodStatus.LOCKED
    assert tracker.toggle_lock(admin) == PeriodStatus.OPEN


def test_lock_applies_to_one_period_only(tracker, agent_session):
    tracker.toggle_lock(agent_session)
    tracker.select_period(agent_session, PeriodType.SECOND_HALF)

    assert tracker.period_data(agent_session).status == PeriodStatus.OPEN
    assert len(tracker.period_data(agent_session).entries) == 16


def test_add_user_requires_admin(tracker, agent_session):
    with pytest.raises(AuthorizationError):
        tracker.add_user(agent_session)


def test_add_user_defaults_name_and_selects(tracker, repo, admin_session):
    user = tracker.add_user(admin_session)

    assert user.name == "Agent 2"
    assert admin_session.selected_user_id == user.user_id
    assert [u.user_id for u in repo.load_users()] == ["u-1", user.user_id]


def test_remove_user_needs_confirmation(tracker, admin_session):
    assert tracker.remove_user(admin_session, "u-1", confirmed=False) is False
    assert [u.user_id for u in tracker.list_users()] == ["u-1"]


def test_remove_user_cascades_and_reselects(tracker, repo, admin_session):
    second = tracker.add_user(admin_session, "Dana")
    tracker.update_entry_field(admin_session, 0, "hours_worked", "6")
    key = PeriodKey(second.user_id, "2026-0", PeriodType.FIRST_HALF)
    assert tracker.store.has_period(key)

    assert tracker.remove_user(admin_session, second.user_id, confirmed=True) is True

    assert [u.user_id for u in tracker.list_users()] == ["u-1"]
    assert admin_session.selected_user_id == "u-1"
    assert not tracker.store.has_period(key)
    assert repo.load_entries(second.user_id, "2026-0", PeriodType.FIRST_HALF) == []


def test_remove_last_user_clears_selection(tracker, admin_session):
    tracker.remove_user(admin_session, "u-1", confirmed=True)

    assert admin_session.selected_user_id is None
    assert tracker.remove_user(admin_session, "u-1", confirmed=True) is False


def test_remove_other_user_keeps_selection(tracker, admin_session):
    tracker.add_user(admin_session, "Dana")
    tracker.select_user(admin_session, "u-1")

    tracker.remove_user(admin_session, "u-2", confirmed=True)
    assert admin_session.selected_user_id == "u-1"


def test_rename_user_keeps_id_and_entries(tracker, repo, agent_session):
    tracker.update_entry_field(agent_session, 0, "hours_worked", "5")

    user = tracker.rename_user(agent_session, "u-1", "Sean")

    assert (user.user_id, user.name) == ("u-1", "Sean")
    assert repo.load_users()[0].name == "Sean"
    assert tracker.total_hours(agent_session) == "5.00"
    assert tracker.rename_user(agent_session, "nobody", "X") is None


def test_select_month_and_period(tracker, agent_session):
    tracker.select_month(agent_session, 1)
    tracker.select_period(agent_session, "SECOND_HALF")

    assert agent_session.month_key == "2026-1"
    assert len(tracker.period_data(agent_session).entries) == 13

    with pytest.raises(ValidationError):
        tracker.select_month(agent_session, 12)
    with pytest.raises(ValidationError):
        tracker.select_period(agent_session, "THIRD_HALF")


def test_reload_restores_entries_and_status(tracker, repo, agent_session):
    tracker.update_entry_field(agent_session, 2, "hours_worked", "4.25")
    tracker.toggle_lock(agent_session)

    fresh = TrackerService(repo, repo)
    session = TrackerSession()
    fresh.load(session)
    data = fresh.period_data(session)

    assert data.status == PeriodStatus.LOCKED
    assert len(data.entries) == 15
    assert data.entries[2].hours_worked == 4.25
    assert fresh.total_hours(session) == "4.25"


def test_persistence_failure_is_logged_not_raised(repo, id_factory, caplog):
    broken = BrokenEntries()
    tracker = TrackerService(repo, broken, id_factory=id_factory)
    session = TrackerSession()
    tracker.load(session)

    entry = tracker.update_entry_field(session, 0, "hours_worked", "3")

    assert entry.hours_worked == 3.0
    assert tracker.sync_status == SyncStatus.FAILED
    assert "database unavailable" in tracker.last_sync.error
    assert "save_entry" in caplog.text

    assert tracker.toggle_lock(session) == PeriodStatus.LOCKED
    assert tracker.period_data(session).status == PeriodStatus.LOCKED


def test_sync_status_after_successful_pushes(tracker, agent_session):
    assert tracker.sync_status == SyncStatus.SYNCED
    tracker.update_entry_field(agent_session, 0, "comments", "ok")
    assert tracker.sync_status == SyncStatus.SYNCED


def test_save_period_pushes_every_row(tracker, repo, agent_session):
    results = tracker.save_period(agent_session)

    assert len(results) == 16
    assert all(r.ok for r in results)
    assert len(repo.load_entries("u-1", "2026-0", PeriodType.FIRST_HALF)) == 15
    assert all(e.entry_id for e in tracker.period_data(agent_session).entries)


def test_derived_mode_computes_hours(repo, id_factory):
    tracker = TrackerService(repo, repo, hours_policy=DerivedHoursPolicy(), id_factory=id_factory)
    session = TrackerSession()
    tracker.load(session)

    tracker.update_entry_field(session, 0, "start_time", "09:00")
    entry = tracker.update_entry_field(session, 0, "end_time", "17:30")

    assert entry.hours_worked == 8.5
    assert tracker.total_hours(session) == "8.50"
    assert tracker.period_view(session)["hours_editable"] is False
    with pytest.raises(ValidationError):
        tracker.update_entry_field(session, 0, "hours_worked", "2")


def test_period_view(tracker, agent_session):
    tracker.update_entry_field(agent_session, 0, "hours_worked", "1.005")
    view = tracker.period_view(agent_session)

    assert view["user"]["name"] == "Agent 1"
    assert view["status"] == "open"
    assert view["editable"] is True
    assert view["entries"][0]["date"] == "January 1, 2026"
    assert view["entries"][0]["day"] == "Thursday"
    assert len(view["entries"]) == 15
    assert view["sync_status"] == "synced"
    assert view["total_hours"] == "1.01"


def test_failed_period_read_is_not_cached_or_overwritten(tracker, repo, agent_session):
    tracker.update_entry_field(agent_session, 0, "hours_worked", "8")
    tracker.toggle_lock(agent_session)

    flaky = UnreadableRepository(repo)
    fresh = TrackerService(repo, flaky)
    session = TrackerSession(role=Role.ADMIN)
    fresh.load(session)

    assert fresh.period_data(session) is None
    assert fresh.sync_status == SyncStatus.FAILED
    assert fresh.update_entry_field(session, 0, "hours_worked", "1") is None
    assert fresh.toggle_lock(session) is None
    assert fresh.save_period(session) == []
    assert fresh.period_view(session)["status"] is None
    assert not fresh.store.has_period(PeriodKey("u-1", "2026-0", PeriodType.FIRST_HALF))

    stored = repo.load_entries("u-1", "2026-0", PeriodType.FIRST_HALF)
    assert [e.hours_worked for e in stored] == [8.0]
    assert repo.load_period_status("u-1", "2026-0", PeriodType.FIRST_HALF) == PeriodStatus.LOCKED

    flaky.down = False
    data = fresh.period_data(session)
    assert data.status == PeriodStatus.LOCKED
    assert data.entries[0].hours_worked == 8.0


def test_failed_roster_read_creates_no_default_user(repo, id_factory):
    flaky = UnreadableRepository(repo)
    tracker = TrackerService(flaky, repo, id_factory=id_factory)
    session = TrackerSession(selected_user_id="kept")

    assert tracker.load(session) == ()
    assert not tracker.store.users_loaded
    assert session.selected_user_id == "kept"
    assert repo.load_users() == []

    repo.save_user(User(user_id="real", name="Robin"))
    flaky.down = False
    tracker.load(session)

    assert [u.user_id for u in tracker.list_users()] == ["real"]
    assert session.selected_user_id == "real"
