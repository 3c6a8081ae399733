"""
Supabase Session Repository Implementation.

Implements the SessionRepository protocol over the workout_sessions table.
The supabase client is synchronous, so every call runs in a worker thread
to keep the event loop free.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from application.ports.session_repository import (
    RepositoryError,
    RepositoryErrorKind,
)
from domain.converters.db_converters import db_row_to_session, session_to_db_row
from domain.models import WorkoutSession

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "workout_sessions"


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository.

    Sessions are stored one row each, with exercises and sets embedded as
    JSON so every write replaces the whole aggregate.
    """

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Sessions table name
        """
        self._client = client
        self._table = table

    # =========================================================================
    # Writes
    # =========================================================================

    async def save(self, session: WorkoutSession) -> None:
        row = session_to_db_row(session)
        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table).insert(row).execute()
            )
        except Exception as e:
            logger.error(f"Failed to save session {session.id}: {e}")
            raise RepositoryError(RepositoryErrorKind.SAVE_FAILED, str(e)) from e
        if not result.data:
            raise RepositoryError(
                RepositoryErrorKind.SAVE_FAILED, f"Insert returned no row for {session.id}"
            )
        logger.debug(f"Saved session {session.id}")

    async def update(self, session: WorkoutSession) -> None:
        row = session_to_db_row(session)
        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table)
                .update(row)
                .eq("id", session.id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update session {session.id}: {e}")
            raise RepositoryError(RepositoryErrorKind.UPDATE_FAILED, str(e)) from e
        if not result.data:
            raise RepositoryError(
                RepositoryErrorKind.NOT_FOUND, f"Session not found: {session.id}"
            )

    async def delete(self, session_id: str) -> None:
        try:
            result = await asyncio.to_thread(
                lambda: self._client.table(self._table)
                .delete()
                .eq("id", session_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            raise RepositoryError(RepositoryErrorKind.DELETE_FAILED, str(e)) from e
        if not result.data:
            raise RepositoryError(
                RepositoryErrorKind.NOT_FOUND, f"Session not found: {session_id}"
            )
        logger.debug(f"Deleted session {session_id}")

    # =========================================================================
    # Reads
    # =========================================================================

    async def fetch(self, session_id: str) -> Optional[WorkoutSession]:
        rows = await self._select(lambda q: q.eq("id", session_id).limit(1))
        if not rows:
            return None
        return self._to_session(rows[0])

    async def fetch_all(self) -> List[WorkoutSession]:
        rows = await self._select(lambda q: q.order("start_date", desc=True))
        return [self._to_session(row) for row in rows]

    async def _select(self, build) -> List[Dict[str, Any]]:
        try:
            result = await asyncio.to_thread(
                lambda: build(self._client.table(self._table).select("*")).execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch sessions: {e}")
            raise RepositoryError(RepositoryErrorKind.FETCH_FAILED, str(e)) from e
        return result.data or []

    @staticmethod
    def _to_session(row: Dict[str, Any]) -> WorkoutSession:
        try:
            return db_row_to_session(row)
        except ValueError as e:
            logger.error(f"Invalid session row {row.get('id')}: {e}")
            raise RepositoryError(RepositoryErrorKind.INVALID_DATA, str(e)) from e
