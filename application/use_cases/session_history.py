"""
GetSessionHistory Use Case.

Reads completed sessions back from the SessionRepository and applies a
SessionHistoryFilter. Results are ordered most recent first.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, List, Optional

from application.ports import RepositoryError, SessionRepository
from domain.models import (
    HistoryFilterKind,
    SessionHistoryFilter,
    SessionMonthGroup,
    WorkoutSession,
)
from domain.models.session import utcnow
from domain.services.statistics import group_by_month

logger = logging.getLogger(__name__)


@dataclass
class SessionHistoryResult:
    """Result of the GetSessionHistory use case execution."""

    success: bool
    sessions: List[WorkoutSession] = field(default_factory=list)
    filter_name: Optional[str] = None
    error: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.sessions)


class GetSessionHistoryUseCase:
    """
    Use case for listing completed sessions.

    Usage:
        >>> use_case = GetSessionHistoryUseCase(session_repo=session_repo)
        >>> result = await use_case.execute(SessionHistoryFilter.recent(10))
        >>> if result.success:
        ...     print([s.workout_name for s in result.sessions])
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
        tz: Optional[tzinfo] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            session_repo: Repository to read sessions from
            clock: Returns the current time for rolling windows
            tz: Time zone used for month grouping
        """
        self._session_repo = session_repo
        self._clock = clock
        self._tz = tz

    async def execute(
        self,
        history_filter: Optional[SessionHistoryFilter] = None,
    ) -> SessionHistoryResult:
        """
        Get completed sessions matching a filter.

        Args:
            history_filter: Selection to apply (default: all)

        Returns:
            SessionHistoryResult with sessions sorted by start_date descending
        """
        history_filter = history_filter or SessionHistoryFilter.all()
        try:
            matching = await self._select(history_filter)
        except RepositoryError as e:
            logger.error(f"Failed to load session history: {e}")
            return SessionHistoryResult(
                success=False,
                filter_name=history_filter.display_name,
                error=str(e),
            )

        logger.debug(f"History '{history_filter.display_name}': {len(matching)} sessions")
        return SessionHistoryResult(
            success=True,
            sessions=matching,
            filter_name=history_filter.display_name,
        )

    async def execute_grouped(
        self,
        history_filter: Optional[SessionHistoryFilter] = None,
    ) -> List[SessionMonthGroup]:
        """
        Same selection as execute(), grouped by calendar month.

        Raises:
            RepositoryError: If the sessions could not be loaded
        """
        matching = await self._select(history_filter or SessionHistoryFilter.all())
        return group_by_month(matching, tz=self._tz)

    async def _select(self, history_filter: SessionHistoryFilter) -> List[WorkoutSession]:
        sessions = await self._session_repo.fetch_all()
        now = self._clock()
        matching = sorted(
            (s for s in sessions if history_filter.matches(s, now)),
            key=lambda s: s.start_date,
            reverse=True,
        )
        if history_filter.kind == HistoryFilterKind.RECENT:
            matching = matching[: history_filter.limit]
        return matching
