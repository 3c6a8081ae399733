"""
Workout session aggregate - one performance of a workout from start to end.

A WorkoutSession is created when the user starts training, mutated in place
while it is active or paused (sets completed, exercises added/reordered),
and frozen once it reaches a terminal state (completed or cancelled).
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


MAX_NOTES_LENGTH = 500


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


class SessionState(str, Enum):
    """
    Lifecycle states of a workout session.

    - ACTIVE: Session is running, sets can be completed
    - PAUSED: Session is on hold, set completion is not allowed
    - COMPLETED: Terminal, the session was finished normally
    - CANCELLED: Terminal, the session was abandoned
    """

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_open(self) -> bool:
        """Check if the session can still be mutated."""
        return self in (SessionState.ACTIVE, SessionState.PAUSED)

    @property
    def is_terminal(self) -> bool:
        """Check if the session has ended (completed or cancelled)."""
        return not self.is_open


class SessionSet(BaseModel):
    """
    A single performed set: weight x reps, optionally a warmup.

    `completed_at` is set exactly once, on the transition from incomplete to
    complete, and is cleared again only if the set is explicitly un-completed.

    Examples:
        >>> s = SessionSet(weight=60, reps=10)
        >>> s.mark_completed(utcnow())
        >>> s.completed, s.volume
        (True, 600.0)
    """

    id: str = Field(default_factory=_new_id, description="Unique set identifier")
    weight: float = Field(default=0.0, ge=0, description="Weight in kg")
    reps: int = Field(default=0, ge=0, description="Repetitions")
    completed: bool = Field(default=False, description="Whether the set was performed")
    completed_at: Optional[datetime] = Field(
        default=None, description="When the set was completed"
    )
    order_index: int = Field(default=0, ge=0, description="Position within the exercise")
    rest_time: Optional[float] = Field(
        default=None, ge=0, description="Rest after this set in seconds"
    )
    is_warmup: bool = Field(default=False, description="Warmup sets are excluded from volume")

    @model_validator(mode="after")
    def validate_completion_timestamp(self) -> "SessionSet":
        """completed_at must be present exactly when the set is completed."""
        if self.completed and self.completed_at is None:
            raise ValueError("Completed set requires completed_at")
        if not self.completed and self.completed_at is not None:
            raise ValueError("Incomplete set must not have completed_at")
        return self

    @property
    def volume(self) -> float:
        """Weight x reps for this set, regardless of completion."""
        return float(self.weight) * self.reps

    def mark_completed(self, at: datetime) -> None:
        """Mark the set completed, stamping completed_at on first completion only."""
        if not self.completed:
            self.completed = True
            self.completed_at = at

    def mark_incomplete(self) -> None:
        """Revert the set to not performed."""
        self.completed = False
        self.completed_at = None


class SessionExercise(BaseModel):
    """
    An exercise as performed within a session.

    Holds a snapshot of the catalog exercise name so history stays readable
    even if the catalog entry is renamed or deleted later.
    """

    id: str = Field(default_factory=_new_id)
    exercise_id: str = Field(..., description="Reference into the exercise catalog")
    exercise_name: str = Field(default="Exercise", description="Name snapshot")
    sets: List[SessionSet] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    order_index: int = Field(default=0, ge=0)
    is_finished: bool = False
    rest_time_to_next: Optional[float] = Field(default=None, ge=0)

    @field_validator("notes")
    @classmethod
    def normalize_notes(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; empty notes become None."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def sorted_sets(self) -> List[SessionSet]:
        return sorted(self.sets, key=lambda s: s.order_index)

    @property
    def working_sets(self) -> List[SessionSet]:
        """Non-warmup sets."""
        return [s for s in self.sets if not s.is_warmup]

    @property
    def completed_sets(self) -> int:
        return sum(1 for s in self.sets if s.completed)

    @property
    def all_working_sets_completed(self) -> bool:
        """True when there is at least one working set and all of them are done."""
        working = self.working_sets
        return bool(working) and all(s.completed for s in working)

    @property
    def total_volume(self) -> float:
        """Volume over completed, non-warmup sets."""
        return self.volume(include_warmup_sets=False)

    def volume(self, include_warmup_sets: bool = False) -> float:
        return sum(
            s.volume
            for s in self.sets
            if s.completed and (include_warmup_sets or not s.is_warmup)
        )

    def find_set(self, set_id: str) -> Optional[SessionSet]:
        for s in self.sets:
            if s.id == set_id:
                return s
        return None

    def renumber_sets(self) -> None:
        """Reassign contiguous order indices 0..N-1 following current order."""
        self.sets.sort(key=lambda s: s.order_index)
        for index, s in enumerate(self.sets):
            s.order_index = index


class WorkoutSession(BaseModel):
    """
    Aggregate root for a single workout session.

    Invariants:
    - end_date is set if and only if state is COMPLETED or CANCELLED
    - exercise order_index values are unique within the session

    Examples:
        >>> session = WorkoutSession(
        ...     workout_name="Push Day",
        ...     exercises=[
        ...         SessionExercise(
        ...             exercise_id="bench",
        ...             exercise_name="Bench Press",
        ...             sets=[SessionSet(weight=60, reps=10)],
        ...         )
        ...     ],
        ... )
        >>> session.state
        <SessionState.ACTIVE: 'active'>
    """

    # Identity
    id: str = Field(default_factory=_new_id)
    workout_id: Optional[str] = Field(
        default=None, description="Template the session was started from"
    )
    workout_name: Optional[str] = Field(
        default=None, description="Template name snapshot, captured at start"
    )

    # Timing and state
    start_date: datetime = Field(default_factory=utcnow)
    end_date: Optional[datetime] = None
    state: SessionState = SessionState.ACTIVE

    # Structure
    exercises: List[SessionExercise] = Field(default_factory=list)

    # Health data
    health_session_id: Optional[str] = Field(
        default=None, description="Handle of the external health-tracking session"
    )
    active_energy_kcal: Optional[float] = Field(
        default=None, ge=0, description="Energy reported to the health store on end"
    )

    @model_validator(mode="after")
    def validate_end_date(self) -> "WorkoutSession":
        """Enforce end_date <-> terminal state and unique exercise ordering."""
        if self.state.is_terminal and self.end_date is None:
            raise ValueError(f"Session in state '{self.state.value}' requires end_date")
        if self.state.is_open and self.end_date is not None:
            raise ValueError(f"Session in state '{self.state.value}' must not have end_date")
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        indices = [e.order_index for e in self.exercises]
        if len(indices) != len(set(indices)):
            raise ValueError("Exercise order_index values must be unique")
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def sorted_exercises(self) -> List[SessionExercise]:
        return sorted(self.exercises, key=lambda e: e.order_index)

    @property
    def exercise_ids(self) -> List[str]:
        return [e.id for e in self.sorted_exercises]

    @property
    def next_order_index(self) -> int:
        return max((e.order_index for e in self.exercises), default=-1) + 1

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises)

    @property
    def completed_sets(self) -> int:
        return sum(e.completed_sets for e in self.exercises)

    @property
    def total_volume(self) -> float:
        """Sum of weight x reps over completed, non-warmup sets."""
        return self.volume(include_warmup_sets=False)

    @property
    def total_reps(self) -> int:
        """Reps over completed, non-warmup sets."""
        return sum(
            s.reps
            for e in self.exercises
            for s in e.sets
            if s.completed and not s.is_warmup
        )

    @property
    def progress(self) -> float:
        """Fraction of sets completed (0.0 - 1.0)."""
        total = self.total_sets
        if total == 0:
            return 0.0
        return self.completed_sets / total

    def volume(self, include_warmup_sets: bool = False) -> float:
        return sum(e.volume(include_warmup_sets) for e in self.exercises)

    def duration(self, now: Optional[datetime] = None) -> float:
        """
        Session duration in seconds.

        Uses end_date for ended sessions, otherwise the elapsed time until
        `now` (defaults to the current time).
        """
        end = self.end_date or now or utcnow()
        return max((end - self.start_date).total_seconds(), 0.0)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find_exercise(self, exercise_id: str) -> Optional[SessionExercise]:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    def __str__(self) -> str:
        name = self.workout_name or "Workout"
        return (
            f'WorkoutSession("{name}", {self.state.value}, '
            f"{len(self.exercises)} exercises, {self.completed_sets}/{self.total_sets} sets)"
        )
