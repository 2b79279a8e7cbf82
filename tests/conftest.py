from __future__ import annotations

import itertools

import pytest

from src.hours_tracker.hours_tracker.core.enums import Role
from src.hours_tracker.hours_tracker.database.json_file_repository import JsonFileRepository
from src.hours_tracker.hours_tracker.tracker.service import TrackerService
from src.hours_tracker.hours_tracker.tracker.session import TrackerSession


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"u-{next(counter)}"


@pytest.fixture
def repo():
    return JsonFileRepository()


@pytest.fixture
def tracker(repo, id_factory):
    return TrackerService(repo, repo, id_factory=id_factory)


@pytest.fixture
def agent_session(tracker):
    session = TrackerSession(role=Role.AGENT, year=2026, month=0)
    tracker.load(session)
    return session


@pytest.fixture
def admin_session(tracker):
    session = TrackerSession(role=Role.ADMIN, year=2026, month=0)
    tracker.load(session)
    return session
