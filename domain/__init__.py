"""
Domain layer for the workout session engine.

This package contains pure domain models and computations that are
independent of infrastructure concerns (database, health store, UI).
"""

from domain.models import (
    CatalogExercise,
    SessionExercise,
    SessionSet,
    SessionState,
    WorkoutSession,
    WorkoutStatistics,
    WorkoutTemplate,
)

__all__ = [
    "CatalogExercise",
    "SessionExercise",
    "SessionSet",
    "SessionState",
    "WorkoutSession",
    "WorkoutStatistics",
    "WorkoutTemplate",
]
