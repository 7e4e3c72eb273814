"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from fittrack.config import get_settings
from fittrack.db import init_db
from fittrack.models.identity import Identity


class FixedClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the default data directory at a temp dir for every test."""
    monkeypatch.setenv("FITTRACK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("FITTRACK_USER", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_db_path(tmp_path):
    """A database path that does not exist yet."""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_path(temp_db_path):
    """An initialized, empty database."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 31, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def alice():
    return Identity(user_id="alice")


@pytest.fixture
def bob():
    return Identity(user_id="bob")
