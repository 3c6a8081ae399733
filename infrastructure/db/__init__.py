"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into the
session lifecycle manager and the history/statistics use cases.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionRepository,
        SupabaseExerciseCatalogRepository,
        SupabaseWorkoutTemplateRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    session_repo = SupabaseSessionRepository(client)
    catalog_repo = SupabaseExerciseCatalogRepository(client)
    workout_repo = SupabaseWorkoutTemplateRepository(client)
"""

from infrastructure.db.session_repository import SupabaseSessionRepository
from infrastructure.db.exercise_catalog_repository import (
    SupabaseExerciseCatalogRepository,
)
from infrastructure.db.workout_template_repository import (
    SupabaseWorkoutTemplateRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseExerciseCatalogRepository",
    "SupabaseWorkoutTemplateRepository",
]
