"""
Exercise Catalog Repository Interface (Port).

The catalog is owned by another part of the application; the session engine
only reads entries and records what was last lifted.
"""

from datetime import datetime
from typing import Optional, Protocol

from domain.models import CatalogExercise


class ExerciseCatalogRepository(Protocol):
    """Abstract interface for exercise catalog access."""

    async def fetch(self, exercise_id: str) -> Optional[CatalogExercise]:
        """
        Get a catalog exercise by id.

        Args:
            exercise_id: Catalog exercise identifier

        Returns:
            The exercise or None if not found
        """
        ...

    async def update_last_used(
        self,
        exercise_id: str,
        weight: float,
        reps: int,
        set_count: Optional[int] = None,
        date: Optional[datetime] = None,
    ) -> None:
        """
        Record the most recently used values for an exercise.

        Args:
            exercise_id: Catalog exercise identifier
            weight: Weight of the last working set
            reps: Reps of the last working set
            set_count: Number of working sets performed, if known
            date: When the values were used

        Raises:
            RepositoryError: NOT_FOUND or UPDATE_FAILED
        """
        ...
