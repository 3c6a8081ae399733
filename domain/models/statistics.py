"""
Workout statistics value objects.

Statistics are derived from completed sessions on every query and never
persisted. See domain.services.statistics for the computation.
"""

import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field


class TimePeriod(str, Enum):
    """
    Aggregation periods for statistics.

    WEEK, MONTH and YEAR are calendar periods containing the reference date
    (weeks start on Monday). CUSTOM carries an explicit range supplied by
    the caller.
    """

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL_TIME = "all_time"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return {
            TimePeriod.WEEK: "Week",
            TimePeriod.MONTH: "Month",
            TimePeriod.YEAR: "Year",
            TimePeriod.ALL_TIME: "All Time",
            TimePeriod.CUSTOM: "Custom",
        }[self]

    def date_range(
        self, reference_date: datetime
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Get the half-open [start, end) range of this period around a date.

        Args:
            reference_date: Date the period is anchored to (its tzinfo is kept)

        Returns:
            (start, end) tuple; both None for ALL_TIME

        Raises:
            ValueError: For CUSTOM, which has no implicit range
        """
        day_start = reference_date.replace(hour=0, minute=0, second=0, microsecond=0)

        if self == TimePeriod.WEEK:
            start = day_start - timedelta(days=day_start.weekday())
            return start, start + timedelta(days=7)
        if self == TimePeriod.MONTH:
            start = day_start.replace(day=1)
            return start, start + relativedelta(months=1)
        if self == TimePeriod.YEAR:
            start = day_start.replace(month=1, day=1)
            return start, start + relativedelta(years=1)
        if self == TimePeriod.ALL_TIME:
            return None, None
        raise ValueError("Custom period requires an explicit date range")


class RecordType(str, Enum):
    """Kinds of personal records tracked per exercise."""

    MAX_WEIGHT = "max_weight"
    MAX_REPS = "max_reps"
    MAX_VOLUME = "max_volume"
    BEST_SET = "best_set"


class PersonalRecord(BaseModel):
    """A personal best for one exercise."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    exercise_name: str
    type: RecordType
    value: float
    achieved_date: datetime

    model_config = {"frozen": True}


class WorkoutStatistics(BaseModel):
    """
    Aggregated statistics over completed sessions in a period.

    Examples:
        >>> stats = WorkoutStatistics.empty(TimePeriod.ALL_TIME)
        >>> stats.total_workouts, stats.formatted_total_duration
        (0, '0h 00m')
    """

    period: TimePeriod
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    total_workouts: int = Field(default=0, ge=0)
    total_duration: float = Field(default=0.0, ge=0, description="Seconds")
    total_volume: float = Field(default=0.0, ge=0, description="kg (weight x reps)")
    total_sets: int = Field(default=0, ge=0)
    total_reps: int = Field(default=0, ge=0)

    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    active_days: int = Field(default=0, ge=0)
    most_frequent_workout: Optional[str] = None

    personal_records: List[PersonalRecord] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def empty(
        cls,
        period: TimePeriod,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> "WorkoutStatistics":
        return cls(period=period, start_date=start_date, end_date=end_date)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def average_workout_duration(self) -> float:
        if self.total_workouts == 0:
            return 0.0
        return self.total_duration / self.total_workouts

    @property
    def average_volume_per_workout(self) -> float:
        if self.total_workouts == 0:
            return 0.0
        return self.total_volume / self.total_workouts

    @property
    def formatted_total_duration(self) -> str:
        """Total duration as 'Xh MMm'."""
        total = int(self.total_duration)
        hours = total // 3600
        minutes = (total % 3600) // 60
        return f"{hours}h {minutes:02d}m"

    @property
    def formatted_average_duration(self) -> str:
        """Average duration as 'M:SS'."""
        total = int(self.average_workout_duration)
        return f"{total // 60}:{total % 60:02d}"

    @property
    def formatted_total_volume(self) -> str:
        return f"{self.total_volume:.0f} kg"

    @property
    def formatted_average_volume(self) -> str:
        return f"{self.average_volume_per_workout:.0f} kg"
