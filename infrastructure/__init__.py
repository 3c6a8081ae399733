"""
Infrastructure Layer for the workout session engine.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseSessionRepository,
    SupabaseExerciseCatalogRepository,
    SupabaseWorkoutTemplateRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseExerciseCatalogRepository",
    "SupabaseWorkoutTemplateRepository",
]
