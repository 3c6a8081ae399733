"""
Workout Template Repository Interface (Port).

Templates are read-only from the session engine's point of view.
"""

from typing import Optional, Protocol

from domain.models import WorkoutTemplate


class WorkoutTemplateRepository(Protocol):
    """Abstract interface for loading workout templates."""

    async def fetch(self, workout_id: str) -> Optional[WorkoutTemplate]:
        """
        Get a workout template by id.

        Args:
            workout_id: Template identifier

        Returns:
            The template or None if not found

        Raises:
            RepositoryError: FETCH_FAILED or INVALID_DATA
        """
        ...
