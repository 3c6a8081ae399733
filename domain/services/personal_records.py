"""
Personal record detection over completed sessions.

Records are tracked per exercise name (the snapshot stored on the session),
using completed working sets only:
- max weight lifted in a single set
- max reps in a single set
- max total volume of the exercise within one session
- best single set by weight x reps
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from domain.models import (
    PersonalRecord,
    RecordType,
    SessionExercise,
    SessionState,
    WorkoutSession,
)


@dataclass(frozen=True)
class TopLift:
    """Heaviest weight lifted for an exercise."""

    exercise_name: str
    weight: float
    date: datetime


def _completed_working_sets(exercise: SessionExercise):
    return [s for s in exercise.sets if s.completed and not s.is_warmup]


def _exercise_metrics(exercise: SessionExercise) -> Optional[Dict[RecordType, float]]:
    sets = _completed_working_sets(exercise)
    if not sets:
        return None
    return {
        RecordType.MAX_WEIGHT: max(s.weight for s in sets),
        RecordType.MAX_REPS: float(max(s.reps for s in sets)),
        RecordType.MAX_VOLUME: exercise.total_volume,
        RecordType.BEST_SET: max(s.volume for s in sets),
    }


def _completed_chronological(sessions: Iterable[WorkoutSession]) -> List[WorkoutSession]:
    return sorted(
        (s for s in sessions if s.state == SessionState.COMPLETED),
        key=lambda s: s.start_date,
    )


def detect_personal_records(sessions: Iterable[WorkoutSession]) -> List[PersonalRecord]:
    """
    Find the best value of every record type for every exercise.

    The earliest session reaching a record value keeps it; later equal
    values do not replace it.

    Returns:
        Records sorted by achieved date, most recent first
    """
    best: Dict[Tuple[str, RecordType], Tuple[float, datetime]] = {}

    for session in _completed_chronological(sessions):
        for exercise in session.sorted_exercises:
            metrics = _exercise_metrics(exercise)
            if metrics is None:
                continue
            for record_type, value in metrics.items():
                key = (exercise.exercise_name, record_type)
                current = best.get(key)
                if current is None or value > current[0]:
                    best[key] = (value, session.start_date)

    records = [
        PersonalRecord(
            exercise_name=name,
            type=record_type,
            value=value,
            achieved_date=achieved,
        )
        for (name, record_type), (value, achieved) in best.items()
    ]
    records.sort(key=lambda r: r.achieved_date, reverse=True)
    return records


def recent_personal_records(
    sessions: Iterable[WorkoutSession],
    now: datetime,
    days: int = 7,
) -> List[PersonalRecord]:
    """Personal records achieved within the last `days` days."""
    cutoff = now - timedelta(days=days)
    return [r for r in detect_personal_records(sessions) if r.achieved_date >= cutoff]


def check_for_new_record(
    exercise: SessionExercise,
    previous_sessions: Iterable[WorkoutSession],
) -> Optional[RecordType]:
    """
    Check whether an exercise beats the previous records for its name.

    Record types are checked in order: max weight, max reps, max volume,
    best set. An exercise with no history never counts as a new record.

    Returns:
        The first record type that was beaten, or None
    """
    metrics = _exercise_metrics(exercise)
    if metrics is None:
        return None

    previous = {
        r.type: r.value
        for r in detect_personal_records(previous_sessions)
        if r.exercise_name == exercise.exercise_name
    }
    for record_type in (
        RecordType.MAX_WEIGHT,
        RecordType.MAX_REPS,
        RecordType.MAX_VOLUME,
        RecordType.BEST_SET,
    ):
        if record_type in previous and metrics[record_type] > previous[record_type]:
            return record_type
    return None


def top_lifts_by_weight(
    sessions: Iterable[WorkoutSession],
    limit: int = 3,
) -> List[TopLift]:
    """Exercises ranked by the heaviest completed working set."""
    heaviest: Dict[str, TopLift] = {}
    for session in _completed_chronological(sessions):
        for exercise in session.exercises:
            sets = _completed_working_sets(exercise)
            if not sets:
                continue
            weight = max(s.weight for s in sets)
            current = heaviest.get(exercise.exercise_name)
            if current is None or weight > current.weight:
                heaviest[exercise.exercise_name] = TopLift(
                    exercise_name=exercise.exercise_name,
                    weight=weight,
                    date=session.start_date,
                )

    ranked = sorted(heaviest.values(), key=lambda lift: lift.weight, reverse=True)
    return ranked[:limit]
