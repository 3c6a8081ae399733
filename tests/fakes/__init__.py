"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the ports
for fast, isolated testing. No database or health store required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure injection and call recording
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeSessionRepository, make_completed_session

    repo = FakeSessionRepository()
    repo.seed([make_completed_session(start=datetime(2025, 1, 1, 9, tzinfo=timezone.utc))])
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

from domain.models import (
    CatalogExercise,
    SessionExercise,
    SessionSet,
    SessionState,
    TemplateExercise,
    WorkoutSession,
    WorkoutTemplate,
)

# Import all fake implementations
from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.exercise_catalog_repository import FakeExerciseCatalogRepository
from tests.fakes.workout_template_repository import FakeWorkoutTemplateRepository
from tests.fakes.health_bridge import FakeHealthBridge


# (weight, reps, is_warmup)
SetTuple = Tuple[float, int, bool]


# =============================================================================
# Factory Functions
# =============================================================================


def make_exercise(
    exercise_id: str = "bench",
    name: str = "Bench Press",
    sets: Iterable[SetTuple] = ((60.0, 10, False),),
    *,
    completed_at: Optional[datetime] = None,
    order_index: int = 0,
) -> SessionExercise:
    """
    Build a SessionExercise from (weight, reps, is_warmup) tuples.

    Sets are completed when completed_at is given, incomplete otherwise.
    """
    return SessionExercise(
        exercise_id=exercise_id,
        exercise_name=name,
        order_index=order_index,
        sets=[
            SessionSet(
                weight=weight,
                reps=reps,
                is_warmup=is_warmup,
                order_index=index,
                completed=completed_at is not None,
                completed_at=completed_at,
            )
            for index, (weight, reps, is_warmup) in enumerate(sets)
        ],
    )


def make_completed_session(
    *,
    start: datetime,
    workout_name: Optional[str] = "Push Day",
    workout_id: Optional[str] = None,
    duration: timedelta = timedelta(hours=1),
    exercises: Optional[Iterable[SessionExercise]] = None,
) -> WorkoutSession:
    """Build a COMPLETED session; defaults to one completed 60x10 bench set."""
    if exercises is None:
        exercises = [make_exercise(completed_at=start + timedelta(minutes=5))]
    return WorkoutSession(
        workout_id=workout_id,
        workout_name=workout_name,
        start_date=start,
        end_date=start + duration,
        state=SessionState.COMPLETED,
        exercises=list(exercises),
    )


def make_template(
    workout_id: str = "w-push",
    name: str = "Push Day",
) -> WorkoutTemplate:
    """Two-exercise template: bench 3x8 @ 60, overhead press 2 sets with per-set rest."""
    return WorkoutTemplate(
        id=workout_id,
        name=name,
        exercises=[
            TemplateExercise(
                exercise_id="bench",
                exercise_name="Bench Press",
                target_sets=3,
                target_reps=8,
                target_weight=60.0,
                rest_time=120.0,
                order_index=0,
            ),
            TemplateExercise(
                exercise_id="ohp",
                exercise_name="Overhead Press",
                target_sets=2,
                target_reps=10,
                target_weight=30.0,
                per_set_rest_times=[60.0, 75.0],
                order_index=1,
            ),
        ],
    )


def create_catalog_repo() -> FakeExerciseCatalogRepository:
    """Catalog with bench (last used 70x6), ohp (never used) and squat."""
    repo = FakeExerciseCatalogRepository()
    repo.seed([
        CatalogExercise(
            id="bench",
            name="Bench Press",
            last_used_weight=70.0,
            last_used_reps=6,
            last_used_set_count=4,
            last_used_rest_time=150.0,
        ),
        CatalogExercise(id="ohp", name="Overhead Press"),
        CatalogExercise(id="squat", name="Squat", last_used_weight=100.0, last_used_reps=5),
    ])
    return repo


def create_session_repo(
    *,
    num_sessions: int = 0,
    first_start: datetime = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc),
) -> FakeSessionRepository:
    """
    Create a FakeSessionRepository with completed sessions on consecutive days.

    Args:
        num_sessions: Number of sample sessions to create
        first_start: Start time of the first session

    Returns:
        Pre-populated FakeSessionRepository
    """
    repo = FakeSessionRepository()
    repo.seed([
        make_completed_session(start=first_start + timedelta(days=i))
        for i in range(num_sessions)
    ])
    return repo


__all__ = [
    # Fakes
    "FakeSessionRepository",
    "FakeExerciseCatalogRepository",
    "FakeWorkoutTemplateRepository",
    "FakeHealthBridge",
    # Factories
    "make_exercise",
    "make_completed_session",
    "make_template",
    "create_catalog_repo",
    "create_session_repo",
]
