"""
Unit tests for GetSessionHistoryUseCase.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from application.ports import RepositoryError
from application.use_cases import GetSessionHistoryUseCase
from domain.models import SessionHistoryFilter, SessionState, WorkoutSession
from tests.fakes import FakeSessionRepository, make_completed_session

pytestmark = pytest.mark.unit

UTC = timezone.utc
NOW = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


def days_ago(days: int, **kwargs) -> WorkoutSession:
    return make_completed_session(start=NOW - timedelta(days=days), **kwargs)


@pytest.fixture
def repo():
    repo = FakeSessionRepository()
    repo.seed([
        days_ago(1, workout_id="w-push", workout_name="Push"),
        days_ago(3, workout_id="w-pull", workout_name="Pull"),
        days_ago(10, workout_id="w-push", workout_name="Push"),
        days_ago(40, workout_id="w-legs", workout_name="Legs"),
        days_ago(200, workout_id="w-push", workout_name="Push"),
        days_ago(500, workout_id="w-pull", workout_name="Pull"),
        WorkoutSession(start_date=NOW - timedelta(hours=1), workout_id="w-push"),
        WorkoutSession(
            start_date=NOW - timedelta(days=2),
            end_date=NOW - timedelta(days=2) + timedelta(minutes=5),
            state=SessionState.CANCELLED,
            workout_id="w-push",
        ),
    ])
    return repo


@pytest.fixture
def use_case(repo):
    return GetSessionHistoryUseCase(repo, clock=lambda: NOW)


def ages(result) -> list:
    return [(NOW - s.start_date).days for s in result.sessions]


class TestFilters:
    @pytest.mark.asyncio
    async def test_default_is_all_completed_newest_first(self, use_case):
        result = await use_case.execute()

        assert result.success
        assert result.filter_name == "All"
        assert ages(result) == [1, 3, 10, 40, 200, 500]
        assert all(s.state == SessionState.COMPLETED for s in result.sessions)

    @pytest.mark.asyncio
    async def test_recent_caps_after_filtering(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.recent(2))

        assert ages(result) == [1, 3]
        assert result.total == 2
        assert result.filter_name == "Last 2"

    @pytest.mark.asyncio
    async def test_recent_larger_than_history(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.recent(50))
        assert result.total == 6

    @pytest.mark.asyncio
    async def test_last_week(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.last_week())
        assert ages(result) == [1, 3]

    @pytest.mark.asyncio
    async def test_last_month(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.last_month())
        assert ages(result) == [1, 3, 10]

    @pytest.mark.asyncio
    async def test_last_three_months(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.last_three_months())
        assert ages(result) == [1, 3, 10, 40]

    @pytest.mark.asyncio
    async def test_last_year(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.last_year())
        assert ages(result) == [1, 3, 10, 40, 200]

    @pytest.mark.asyncio
    async def test_date_range_is_inclusive(self, use_case):
        history_filter = SessionHistoryFilter.date_range(
            NOW - timedelta(days=10), NOW - timedelta(days=3)
        )

        result = await use_case.execute(history_filter)

        assert ages(result) == [3, 10]

    @pytest.mark.asyncio
    async def test_for_workout(self, use_case):
        result = await use_case.execute(SessionHistoryFilter.for_workout("w-push"))

        assert ages(result) == [1, 10, 200]
        assert {s.workout_id for s in result.sessions} == {"w-push"}

    @pytest.mark.asyncio
    async def test_all_includes_sessions_ahead_of_clock(self, repo, use_case):
        # Recorded on a device whose clock runs ahead
        repo.seed([make_completed_session(start=NOW + timedelta(hours=2))])

        result = await use_case.execute(SessionHistoryFilter.all())

        assert result.total == 7
        assert result.sessions[0].start_date == NOW + timedelta(hours=2)

    @pytest.mark.asyncio
    async def test_empty_repository(self):
        result = await GetSessionHistoryUseCase(FakeSessionRepository()).execute()
        assert result.success
        assert result.sessions == []


class TestFilterValidation:
    def test_recent_requires_positive_limit(self):
        with pytest.raises(ValidationError):
            SessionHistoryFilter.recent(0)

    def test_inverted_date_range_rejected(self):
        with pytest.raises(ValidationError):
            SessionHistoryFilter.date_range(NOW, NOW - timedelta(days=1))

    def test_naive_date_range_rejected(self):
        with pytest.raises(ValidationError):
            SessionHistoryFilter.date_range(datetime(2025, 1, 1), datetime(2025, 1, 3))
        with pytest.raises(ValidationError):
            SessionHistoryFilter.date_range(NOW - timedelta(days=1), datetime(2025, 3, 16))


class TestFailures:
    @pytest.mark.asyncio
    async def test_repository_failure_returns_error_result(self, repo, use_case):
        repo.fail_on("fetch_all")

        result = await use_case.execute(SessionHistoryFilter.last_week())

        assert not result.success
        assert result.sessions == []
        assert result.filter_name == "Last Week"
        assert "fetch_failed" in result.error

    @pytest.mark.asyncio
    async def test_grouped_propagates_repository_failure(self, repo, use_case):
        repo.fail_on("fetch_all")

        with pytest.raises(RepositoryError):
            await use_case.execute_grouped()


class TestGrouped:
    @pytest.mark.asyncio
    async def test_groups_by_month_newest_first(self, use_case):
        groups = await use_case.execute_grouped(SessionHistoryFilter.last_three_months())

        # NOW - 1, 3 and 10 days fall in March; 40 days back is early February
        assert [(g.year, g.month) for g in groups] == [(2025, 3), (2025, 2)]
        assert groups[0].session_count == 3
        assert groups[1].label == "February 2025"
