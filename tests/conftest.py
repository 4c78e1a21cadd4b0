"""
Shared fixtures for the sleep tracker tests.
Every test gets its own in-memory SQLite database.
"""

import pytest

from sleeptracker.core.tasks import DatabaseExecutor
from sleeptracker.db.crud.sleep_night import SleepDatabaseDao
from sleeptracker.db.engine import SleepDatabase


class FakeClock:
    """Stands in for now_millis(); tests move `now` by hand."""

    def __init__(self, now: int = 1000):
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def database():
    db = SleepDatabase("sqlite://")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def dao(database):
    return SleepDatabaseDao(database)


@pytest.fixture
def executor():
    ex = DatabaseExecutor()
    yield ex
    ex.shutdown()


@pytest.fixture
def clock():
    return FakeClock()
