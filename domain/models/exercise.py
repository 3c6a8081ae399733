"""
Exercise catalog entry.

The catalog remembers what the user last lifted for each exercise so new
sessions and newly added exercises start from sensible defaults.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_SET_COUNT = 3
DEFAULT_REPS = 8
DEFAULT_WEIGHT = 0.0
DEFAULT_REST_SECONDS = 90.0


class CatalogExercise(BaseModel):
    """
    An exercise in the user's exercise catalog.

    Examples:
        >>> squat = CatalogExercise(id="ex-1", name="Squat", last_used_weight=100)
        >>> squat.default_weight
        100.0
        >>> squat.default_set_count
        3
    """

    id: str = Field(..., description="Catalog exercise identifier")
    name: str = Field(..., min_length=1, max_length=200)

    # Last-used values (updated whenever a set is logged)
    last_used_weight: Optional[float] = Field(default=None, ge=0)
    last_used_reps: Optional[int] = Field(default=None, ge=0)
    last_used_set_count: Optional[int] = Field(default=None, ge=1)
    last_used_rest_time: Optional[float] = Field(default=None, ge=0)
    last_used_at: Optional[datetime] = None

    @property
    def default_weight(self) -> float:
        if self.last_used_weight is None:
            return DEFAULT_WEIGHT
        return float(self.last_used_weight)

    @property
    def default_reps(self) -> int:
        return self.last_used_reps if self.last_used_reps is not None else DEFAULT_REPS

    @property
    def default_set_count(self) -> int:
        return self.last_used_set_count or DEFAULT_SET_COUNT

    @property
    def default_rest_time(self) -> float:
        if self.last_used_rest_time is None:
            return DEFAULT_REST_SECONDS
        return self.last_used_rest_time

    def __str__(self) -> str:
        return f"CatalogExercise({self.name!r})"
