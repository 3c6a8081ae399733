"""
Statistics over completed workout sessions.

Everything here is a pure function of its inputs with no repository access.
Callers pass the reference time and time zone explicitly; only a missing
reference time falls back to the current UTC time.

Day-based values (streaks, active days) use calendar dates in the supplied
time zone, so a session at 23:30 local time counts for that local day even
if it is already the next day in UTC.
"""

import logging
from collections import Counter
from datetime import date, datetime, timedelta, timezone, tzinfo
from itertools import groupby
from typing import Iterable, List, Optional, Sequence, Tuple

from domain.models import (
    SessionMonthGroup,
    SessionState,
    TimePeriod,
    WorkoutSession,
    WorkoutStatistics,
)
from domain.services.personal_records import detect_personal_records

logger = logging.getLogger(__name__)

UNKNOWN_WORKOUT_NAME = "Unknown"


def local_day(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of a moment in the given time zone (naive values kept as-is)."""
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def calculate_streaks(days: Iterable[date], today: date) -> Tuple[int, int]:
    """
    Compute (current_streak, longest_streak) from active calendar days.

    The longest streak is the longest run of consecutive days. The current
    streak is the run ending at the most recent active day, but only while
    that day is today or yesterday; otherwise it is 0.

    Args:
        days: Days with at least one completed session (duplicates allowed)
        today: Reference day

    Returns:
        Tuple of (current_streak, longest_streak)

    Examples:
        >>> calculate_streaks(
        ...     [date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 4)],
        ...     today=date(2025, 1, 4),
        ... )
        (1, 2)
    """
    unique_days = sorted(set(days))
    if not unique_days:
        return 0, 0

    longest = 1
    run = 1
    for previous, current in zip(unique_days, unique_days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    last_day = unique_days[-1]
    if today - last_day > timedelta(days=1):
        return 0, longest

    # `run` is the length of the run ending at the last active day
    return run, longest


def _localize(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Read a naive datetime as wall time in tz (UTC when tz is None)."""
    if value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz or timezone.utc)


def _in_range(
    session: WorkoutSession,
    start: Optional[datetime],
    end: Optional[datetime],
    end_inclusive: bool,
) -> bool:
    if start is not None and session.start_date < start:
        return False
    if end is not None:
        if end_inclusive and session.start_date > end:
            return False
        if not end_inclusive and session.start_date >= end:
            return False
    return True


def _most_frequent_workout(sessions: Sequence[WorkoutSession]) -> Optional[str]:
    if not sessions:
        return None
    names = [s.workout_name or UNKNOWN_WORKOUT_NAME for s in sessions]
    counts = Counter(names)
    best = max(counts.values())
    # sessions are chronological, so the first name reaching the top count wins ties
    for name in names:
        if counts[name] == best:
            return name
    return None


def compute_statistics(
    sessions: Iterable[WorkoutSession],
    period: TimePeriod = TimePeriod.ALL_TIME,
    reference_date: Optional[datetime] = None,
    *,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    include_warmup_sets: bool = False,
    tz: Optional[tzinfo] = None,
) -> WorkoutStatistics:
    """
    Aggregate completed sessions into WorkoutStatistics.

    Args:
        sessions: Any sessions; only COMPLETED ones are counted
        period: Period to aggregate over
        reference_date: "Now" for period ranges and the current streak
        start_date: Inclusive range start, required for TimePeriod.CUSTOM
        end_date: Inclusive range end, required for TimePeriod.CUSTOM
        include_warmup_sets: Count warmup sets toward volume, sets and reps
        tz: Time zone for calendar days and period boundaries; naive
            reference_date, start_date and end_date are read as wall time here

    Returns:
        WorkoutStatistics; zero-valued when nothing matches

    Raises:
        ValueError: If a CUSTOM period is missing its range or the range is inverted
    """
    if reference_date is None:
        reference_date = datetime.now(tz or timezone.utc)
    elif reference_date.tzinfo is None:
        reference_date = _localize(reference_date, tz)
    elif tz is not None:
        reference_date = reference_date.astimezone(tz)

    if period == TimePeriod.CUSTOM:
        if start_date is None or end_date is None:
            raise ValueError("Custom period requires start_date and end_date")
        start_date = _localize(start_date, tz)
        end_date = _localize(end_date, tz)
        if end_date < start_date:
            raise ValueError("end_date must not be before start_date")
        range_start, range_end = start_date, end_date
        end_inclusive = True
    else:
        range_start, range_end = period.date_range(reference_date)
        end_inclusive = False

    selected = sorted(
        (
            s
            for s in sessions
            if s.state == SessionState.COMPLETED
            and _in_range(s, range_start, range_end, end_inclusive)
        ),
        key=lambda s: s.start_date,
    )

    if not selected:
        return WorkoutStatistics.empty(period, range_start, range_end)

    counted_sets = [
        s
        for session in selected
        for exercise in session.exercises
        for s in exercise.sets
        if s.completed and (include_warmup_sets or not s.is_warmup)
    ]

    active_days = {local_day(s.start_date, tz) for s in selected}
    current_streak, longest_streak = calculate_streaks(
        active_days, local_day(reference_date, tz)
    )

    stats = WorkoutStatistics(
        period=period,
        start_date=range_start,
        end_date=range_end,
        total_workouts=len(selected),
        total_duration=sum(s.duration() for s in selected),
        total_volume=sum(s.volume(include_warmup_sets) for s in selected),
        total_sets=len(counted_sets),
        total_reps=sum(s.reps for s in counted_sets),
        current_streak=current_streak,
        longest_streak=longest_streak,
        active_days=len(active_days),
        most_frequent_workout=_most_frequent_workout(selected),
        personal_records=detect_personal_records(selected),
    )
    logger.debug(
        f"Computed {period.value} statistics: {stats.total_workouts} workouts, "
        f"{stats.total_volume:.0f} kg"
    )
    return stats


def group_by_month(
    sessions: Iterable[WorkoutSession],
    tz: Optional[tzinfo] = None,
) -> List[SessionMonthGroup]:
    """
    Group sessions by calendar month, most recent month first.

    Sessions within each group are ordered most recent first. The month label
    uses the locale's month name ("%B %Y").
    """
    ordered = sorted(sessions, key=lambda s: s.start_date, reverse=True)

    def month_key(session: WorkoutSession) -> Tuple[int, int]:
        day = local_day(session.start_date, tz)
        return day.year, day.month

    groups = []
    for (year, month), members in groupby(ordered, key=month_key):
        groups.append(
            SessionMonthGroup(
                year=year,
                month=month,
                label=date(year, month, 1).strftime("%B %Y"),
                sessions=list(members),
            )
        )
    return groups
