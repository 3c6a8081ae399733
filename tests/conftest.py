"""
Shared pytest fixtures.

Fixtures wire the SessionLifecycleManager and use cases to the in-memory
fakes with a controllable clock, so tests never touch Supabase, the health
store or the real time.
"""

from datetime import datetime, timedelta, timezone

import pytest

from application.use_cases import SessionLifecycleManager
from backend.settings import Settings
from tests.fakes import (
    FakeHealthBridge,
    FakeSessionRepository,
    FakeWorkoutTemplateRepository,
    create_catalog_repo,
    make_template,
)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def settings():
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def session_repo():
    return FakeSessionRepository()


@pytest.fixture
def catalog_repo():
    return create_catalog_repo()


@pytest.fixture
def workout_repo():
    repo = FakeWorkoutTemplateRepository()
    repo.seed([make_template()])
    return repo


@pytest.fixture
def health_bridge():
    return FakeHealthBridge()


@pytest.fixture
def manager(session_repo, catalog_repo, workout_repo, health_bridge, settings, clock):
    return SessionLifecycleManager(
        session_repo=session_repo,
        catalog_repo=catalog_repo,
        workout_repo=workout_repo,
        health_bridge=health_bridge,
        settings=settings,
        clock=clock,
    )
