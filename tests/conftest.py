"""Shared test fixtures and configuration."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import structlog

from repocache.cache.branch import BranchCache
from repocache.config import ENV_OVERRIDES
from repocache.models import GitBranch


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class EventRecorder:
    """Records the events fired by a managed cache, in order."""

    def __init__(self, cache):
        self.events = []
        cache.cache_invalidated.subscribe(lambda: self.events.append(("invalidated",)))
        cache.cache_updated.subscribe(lambda ts: self.events.append(("updated", ts)))

    @property
    def names(self):
        return [event[0] for event in self.events]

    def clear(self):
        self.events.clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep REPOCACHE_* variables and .env files from the host out of the tests."""
    for env_var in ENV_OVERRIDES:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setattr("repocache.config.load_dotenv", lambda: False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    """Fake clock starting at a fixed UTC time."""
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def branch_cache(clock):
    """Empty branch cache on the fake clock."""
    return BranchCache(clock=clock)


@pytest.fixture
def recorder():
    """Factory attaching an EventRecorder to a cache."""
    return EventRecorder


@pytest.fixture
def main_branch():
    return GitBranch(name="main", tracking="origin/main", is_active=True)


@pytest.fixture
def feature_branch():
    return GitBranch(name="feature/login", tracking="origin/feature/login")


@pytest.fixture
def origin_main():
    return GitBranch(name="origin/main")
