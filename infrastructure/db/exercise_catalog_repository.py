"""
Supabase implementation of ExerciseCatalogRepository.

Reads exercises and records last-used values on the exercises table.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from supabase import Client

from application.ports.session_repository import (
    RepositoryError,
    RepositoryErrorKind,
)
from domain.converters.db_converters import db_row_to_catalog_exercise
from domain.models import CatalogExercise
from domain.models.session import utcnow

logger = logging.getLogger(__name__)


class SupabaseExerciseCatalogRepository:
    """Supabase implementation of ExerciseCatalogRepository protocol."""

    def __init__(self, client: Client, table: str = "exercises"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Exercise catalog table name
        """
        self._client = client
        self._table = table

    async def fetch(self, exercise_id: str) -> Optional[CatalogExercise]:
        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table)
                .select("*")
                .eq("id", exercise_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching exercise {exercise_id}: {e}")
            raise RepositoryError(RepositoryErrorKind.FETCH_FAILED, str(e)) from e

        if not result.data:
            return None
        try:
            return db_row_to_catalog_exercise(result.data[0])
        except (KeyError, ValueError) as e:
            raise RepositoryError(RepositoryErrorKind.INVALID_DATA, str(e)) from e

    async def update_last_used(
        self,
        exercise_id: str,
        weight: float,
        reps: int,
        set_count: Optional[int] = None,
        date: Optional[datetime] = None,
    ) -> None:
        values = {
            "last_used_weight": weight,
            "last_used_reps": reps,
            "last_used_at": (date or utcnow()).isoformat(),
        }
        if set_count is not None:
            values["last_used_set_count"] = set_count

        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table)
                .update(values)
                .eq("id", exercise_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error updating last-used values for {exercise_id}: {e}")
            raise RepositoryError(RepositoryErrorKind.UPDATE_FAILED, str(e)) from e
        if not result.data:
            raise RepositoryError(
                RepositoryErrorKind.NOT_FOUND, f"Exercise not found: {exercise_id}"
            )
