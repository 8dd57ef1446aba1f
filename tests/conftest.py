#tests\conftest.py

"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from slot_manager.core.events import RecordingEventEmitter
from slot_manager.core.pool import SlotPool
from slot_manager.infrastructure.memory.repository import InMemorySettingsRepository
from slot_manager.infrastructure.sql.database import Base, get_session_factory
from slot_manager.infrastructure.sql.repository import SqlSettingsRepository


class TickingClock:
    """Deterministic clock: every call is one second after the previous."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def recorder():
    return RecordingEventEmitter()


@pytest.fixture
def pool(clock, recorder):
    """Empty pool with a fake clock and an event recorder."""
    return SlotPool(emitter=recorder, clock=clock)


@pytest.fixture
def memory_repository():
    return InMemorySettingsRepository()


@pytest.fixture
def test_engine():
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture
def sql_repository(test_engine):
    return SqlSettingsRepository(get_session_factory(test_engine))
