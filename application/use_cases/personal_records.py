"""
GetPersonalRecords Use Case.

Personal bests per exercise across all completed sessions.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from application.ports import RepositoryError, SessionRepository
from domain.models import PersonalRecord
from domain.models.session import utcnow
from domain.services.personal_records import (
    TopLift,
    detect_personal_records,
    recent_personal_records,
    top_lifts_by_weight,
)

logger = logging.getLogger(__name__)


@dataclass
class PersonalRecordsResult:
    """Result of the GetPersonalRecords use case execution."""

    success: bool
    records: List[PersonalRecord] = field(default_factory=list)
    top_lifts: List[TopLift] = field(default_factory=list)
    error: Optional[str] = None


class GetPersonalRecordsUseCase:
    """
    Use case for listing personal records.

    Usage:
        >>> use_case = GetPersonalRecordsUseCase(session_repo=session_repo)
        >>> result = await use_case.execute(recent_days=7)
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_repo = session_repo
        self._clock = clock

    async def execute(
        self,
        *,
        recent_days: Optional[int] = None,
        top_lift_limit: int = 3,
    ) -> PersonalRecordsResult:
        """
        Get personal records and the heaviest lifts.

        Args:
            recent_days: Only records achieved within this many days (None: all)
            top_lift_limit: Number of top lifts to include

        Returns:
            PersonalRecordsResult with records sorted most recent first
        """
        try:
            sessions = await self._session_repo.fetch_all()
        except RepositoryError as e:
            logger.error(f"Failed to load sessions for personal records: {e}")
            return PersonalRecordsResult(success=False, error=str(e))

        if recent_days is None:
            records = detect_personal_records(sessions)
        else:
            records = recent_personal_records(sessions, self._clock(), days=recent_days)

        return PersonalRecordsResult(
            success=True,
            records=records,
            top_lifts=top_lifts_by_weight(sessions, limit=top_lift_limit),
        )
