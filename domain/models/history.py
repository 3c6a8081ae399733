"""
Session history filters and month grouping.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field, model_validator

from domain.models.session import SessionState, WorkoutSession


class HistoryFilterKind(str, Enum):
    RECENT = "recent"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    LAST_THREE_MONTHS = "last_three_months"
    LAST_YEAR = "last_year"
    ALL = "all"
    DATE_RANGE = "date_range"
    FOR_WORKOUT = "for_workout"


_DISPLAY_NAMES = {
    HistoryFilterKind.ALL: "All",
    HistoryFilterKind.LAST_WEEK: "Last Week",
    HistoryFilterKind.LAST_MONTH: "Last Month",
    HistoryFilterKind.LAST_THREE_MONTHS: "Last 3 Months",
    HistoryFilterKind.LAST_YEAR: "Last Year",
    HistoryFilterKind.DATE_RANGE: "Date Range",
    HistoryFilterKind.FOR_WORKOUT: "Workout",
}


class SessionHistoryFilter(BaseModel):
    """
    Selection of completed sessions for the history view.

    Build instances with the named constructors rather than directly:

        >>> SessionHistoryFilter.recent(10).display_name
        'Last 10'
        >>> SessionHistoryFilter.last_month().kind
        <HistoryFilterKind.LAST_MONTH: 'last_month'>
    """

    kind: HistoryFilterKind
    limit: Optional[int] = Field(default=None, ge=1)
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    workout_id: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_arguments(self) -> "SessionHistoryFilter":
        if self.kind == HistoryFilterKind.RECENT and self.limit is None:
            raise ValueError("recent filter requires a limit")
        if self.kind == HistoryFilterKind.DATE_RANGE:
            if self.start is None or self.end is None:
                raise ValueError("date_range filter requires start and end")
            if self.start.tzinfo is None or self.end.tzinfo is None:
                raise ValueError("date_range bounds must be timezone-aware")
            if self.end < self.start:
                raise ValueError("date_range end must not be before start")
        if self.kind == HistoryFilterKind.FOR_WORKOUT and not self.workout_id:
            raise ValueError("for_workout filter requires a workout_id")
        return self

    # -------------------------------------------------------------------------
    # Named constructors
    # -------------------------------------------------------------------------

    @classmethod
    def recent(cls, limit: int) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.RECENT, limit=limit)

    @classmethod
    def last_week(cls) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.LAST_WEEK)

    @classmethod
    def last_month(cls) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.LAST_MONTH)

    @classmethod
    def last_three_months(cls) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.LAST_THREE_MONTHS)

    @classmethod
    def last_year(cls) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.LAST_YEAR)

    @classmethod
    def all(cls) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.ALL)

    @classmethod
    def date_range(cls, start: datetime, end: datetime) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.DATE_RANGE, start=start, end=end)

    @classmethod
    def for_workout(cls, workout_id: str) -> "SessionHistoryFilter":
        return cls(kind=HistoryFilterKind.FOR_WORKOUT, workout_id=workout_id)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    @property
    def display_name(self) -> str:
        if self.kind == HistoryFilterKind.RECENT:
            return f"Last {self.limit}"
        return _DISPLAY_NAMES[self.kind]

    def window(self, now: datetime) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Inclusive start_date bounds selected by this filter.

        Rolling windows end at `now`; None means unbounded on that side.
        """
        if self.kind == HistoryFilterKind.LAST_WEEK:
            return now - timedelta(days=7), now
        if self.kind == HistoryFilterKind.LAST_MONTH:
            return now - relativedelta(months=1), now
        if self.kind == HistoryFilterKind.LAST_THREE_MONTHS:
            return now - relativedelta(months=3), now
        if self.kind == HistoryFilterKind.LAST_YEAR:
            return now - relativedelta(years=1), now
        if self.kind == HistoryFilterKind.ALL:
            return None, None
        if self.kind == HistoryFilterKind.DATE_RANGE:
            return self.start, self.end
        return None, None

    def matches(self, session: WorkoutSession, now: datetime) -> bool:
        """Check whether a session belongs to this filter (completed only)."""
        if session.state != SessionState.COMPLETED:
            return False
        if self.kind == HistoryFilterKind.FOR_WORKOUT:
            return session.workout_id == self.workout_id

        start, end = self.window(now)
        if start is not None and session.start_date < start:
            return False
        if end is not None and session.start_date > end:
            return False
        return True


class SessionMonthGroup(BaseModel):
    """Completed sessions of one calendar month, most recent first."""

    year: int
    month: int = Field(..., ge=1, le=12)
    label: str
    sessions: List[WorkoutSession] = Field(default_factory=list)

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def total_volume(self) -> float:
        return sum(s.total_volume for s in self.sessions)
