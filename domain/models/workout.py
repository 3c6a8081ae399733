"""
Workout template - the plan a session is started from.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TemplateExercise(BaseModel):
    """
    A planned exercise inside a workout template.

    Target values are the fallbacks used when the catalog has no last-used
    values for the exercise.
    """

    exercise_id: str = Field(..., description="Reference into the exercise catalog")
    exercise_name: Optional[str] = Field(default=None, description="Display name")
    target_sets: int = Field(default=3, ge=0, le=50)
    target_reps: Optional[int] = Field(default=None, ge=0)
    target_weight: Optional[float] = Field(default=None, ge=0)
    rest_time: Optional[float] = Field(
        default=None, ge=0, description="Rest between sets and before next exercise (s)"
    )
    per_set_rest_times: Optional[List[float]] = Field(
        default=None, description="Individual rest time per set, overrides rest_time"
    )
    order_index: int = Field(default=0, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)

    def rest_time_for_set(self, set_index: int) -> Optional[float]:
        """Rest after the given set, preferring the per-set value."""
        if self.per_set_rest_times and set_index < len(self.per_set_rest_times):
            return self.per_set_rest_times[set_index]
        return self.rest_time


class WorkoutTemplate(BaseModel):
    """
    Aggregate representing a reusable workout plan.

    Examples:
        >>> template = WorkoutTemplate(
        ...     id="w-1",
        ...     name="Push Day",
        ...     exercises=[
        ...         TemplateExercise(exercise_id="bench", target_sets=4, target_reps=8),
        ...         TemplateExercise(exercise_id="ohp", target_sets=3, order_index=1),
        ...     ],
        ... )
        >>> template.total_sets
        7
    """

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    exercises: List[TemplateExercise] = Field(default_factory=list)
    default_rest_time: float = Field(default=90.0, ge=0)
    notes: Optional[str] = Field(default=None, max_length=2000)
    updated_at: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject whitespace-only names."""
        v = v.strip()
        if not v:
            raise ValueError("Workout name must not be empty")
        return v

    @property
    def sorted_exercises(self) -> List[TemplateExercise]:
        return sorted(self.exercises, key=lambda e: e.order_index)

    @property
    def total_sets(self) -> int:
        return sum(e.target_sets for e in self.exercises)
