"""
Supabase implementation of WorkoutTemplateRepository.
"""

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError
from supabase import Client

from application.ports.session_repository import (
    RepositoryError,
    RepositoryErrorKind,
)
from domain.converters.db_converters import db_row_to_workout_template
from domain.models import WorkoutTemplate

logger = logging.getLogger(__name__)


class SupabaseWorkoutTemplateRepository:
    """Loads workout templates (exercises stored as JSON) from the workouts table."""

    def __init__(self, client: Client, table: str = "workouts"):
        self._client = client
        self._table = table

    async def fetch(self, workout_id: str) -> Optional[WorkoutTemplate]:
        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table)
                .select("*")
                .eq("id", workout_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching workout {workout_id}: {e}")
            raise RepositoryError(RepositoryErrorKind.FETCH_FAILED, str(e)) from e

        if not result.data:
            return None
        try:
            return db_row_to_workout_template(result.data[0])
        except (KeyError, ValidationError) as e:
            logger.error(f"Invalid workout row {workout_id}: {e}")
            raise RepositoryError(RepositoryErrorKind.INVALID_DATA, str(e)) from e
