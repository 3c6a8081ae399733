"""
CalculateStatistics Use Case.

Loads sessions through the SessionRepository and aggregates the completed
ones into WorkoutStatistics for a time period. Statistics are computed on
every call and never stored.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Dict, List, Optional, Sequence

from application.ports import RepositoryError, SessionRepository
from domain.models import TimePeriod, WorkoutSession, WorkoutStatistics
from domain.models.session import utcnow
from domain.services.statistics import compute_statistics

logger = logging.getLogger(__name__)


@dataclass
class CalculateStatisticsResult:
    """Result of the CalculateStatistics use case execution."""

    success: bool
    statistics: Optional[WorkoutStatistics] = None
    error: Optional[str] = None


class CalculateStatisticsUseCase:
    """
    Use case for computing workout statistics.

    Usage:
        >>> use_case = CalculateStatisticsUseCase(session_repo=session_repo)
        >>> result = await use_case.execute(TimePeriod.WEEK)
        >>> if result.success:
        ...     print(result.statistics.formatted_total_volume)
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
            clock: Returns the reference time for periods and streaks
            tz: Time zone for calendar days and period boundaries
        """
        self._session_repo = session_repo
        self._clock = clock
        self._tz = tz

    async def execute(
        self,
        period: TimePeriod = TimePeriod.ALL_TIME,
        *,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        include_warmup_sets: bool = False,
    ) -> CalculateStatisticsResult:
        """
        Compute statistics for one period.

        Args:
            period: Period to aggregate
            start_date: Inclusive start for TimePeriod.CUSTOM
            end_date: Inclusive end for TimePeriod.CUSTOM
            include_warmup_sets: Count warmup sets toward the totals

        Returns:
            CalculateStatisticsResult; an empty history yields zero statistics
        """
        try:
            sessions = await self._session_repo.fetch_all()
        except RepositoryError as e:
            logger.error(f"Failed to load sessions for statistics: {e}")
            return CalculateStatisticsResult(success=False, error=str(e))

        return self._compute(sessions, period, start_date, end_date, include_warmup_sets)

    async def execute_for_periods(
        self,
        periods: Sequence[TimePeriod],
        *,
        include_warmup_sets: bool = False,
    ) -> Dict[TimePeriod, CalculateStatisticsResult]:
        """
        Compute statistics for several calendar periods from one load.

        CUSTOM is not accepted here since it needs an explicit range.
        """
        if TimePeriod.CUSTOM in periods:
            raise ValueError("Custom period is not supported in execute_for_periods")

        try:
            sessions = await self._session_repo.fetch_all()
        except RepositoryError as e:
            logger.error(f"Failed to load sessions for statistics: {e}")
            return {
                period: CalculateStatisticsResult(success=False, error=str(e))
                for period in periods
            }

        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self._compute, sessions, period, None, None, include_warmup_sets
                )
                for period in periods
            )
        )
        return dict(zip(periods, results))

    def _compute(
        self,
        sessions: List[WorkoutSession],
        period: TimePeriod,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        include_warmup_sets: bool,
    ) -> CalculateStatisticsResult:
        try:
            stats = compute_statistics(
                sessions,
                period,
                self._clock(),
                start_date=start_date,
                end_date=end_date,
                include_warmup_sets=include_warmup_sets,
                tz=self._tz,
            )
        except ValueError as e:
            logger.warning(f"Invalid statistics request for {period.value}: {e}")
            return CalculateStatisticsResult(success=False, error=str(e))
        return CalculateStatisticsResult(success=True, statistics=stats)
