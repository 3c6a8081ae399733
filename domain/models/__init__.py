"""
Domain models for workout session tracking.

This package contains pure domain models that are independent of
infrastructure concerns (database, health store, UI).

These models represent the core business concepts:
- WorkoutSession: The aggregate root for one performed workout
- SessionExercise / SessionSet: What was performed, set by set
- WorkoutTemplate: The plan a session is started from
- CatalogExercise: Exercise catalog entry with last-used values
- WorkoutStatistics: Derived aggregates over completed sessions
- SessionHistoryFilter: Selection of sessions for the history view

Usage:
    >>> from domain.models import WorkoutSession, SessionExercise, SessionSet

    >>> session = WorkoutSession(
    ...     workout_name="Leg Day",
    ...     exercises=[
    ...         SessionExercise(
    ...             exercise_id="squat",
    ...             exercise_name="Squat",
    ...             sets=[SessionSet(weight=100, reps=5)],
    ...         )
    ...     ],
    ... )

    >>> # Serialize to JSON
    >>> json_str = session.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> session = WorkoutSession.model_validate_json(json_str)
"""

from domain.models.exercise import CatalogExercise
from domain.models.history import (
    HistoryFilterKind,
    SessionHistoryFilter,
    SessionMonthGroup,
)
from domain.models.session import (
    MAX_NOTES_LENGTH,
    SessionExercise,
    SessionSet,
    SessionState,
    WorkoutSession,
)
from domain.models.statistics import (
    PersonalRecord,
    RecordType,
    TimePeriod,
    WorkoutStatistics,
)
from domain.models.workout import TemplateExercise, WorkoutTemplate

__all__ = [
    # Session aggregate
    "WorkoutSession",
    "SessionExercise",
    "SessionSet",
    "SessionState",
    "MAX_NOTES_LENGTH",
    # Templates and catalog
    "WorkoutTemplate",
    "TemplateExercise",
    "CatalogExercise",
    # History
    "SessionHistoryFilter",
    "HistoryFilterKind",
    "SessionMonthGroup",
    # Statistics
    "WorkoutStatistics",
    "TimePeriod",
    "PersonalRecord",
    "RecordType",
]
