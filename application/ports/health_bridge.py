"""
Health Bridge Interface (Port).

Mirrors a workout session into an external health store (for example a
phone health app). Every call is best-effort from the session engine's
point of view: failures are reported but never undo a local transition.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Protocol


class WorkoutActivityType(str, Enum):
    """Activity types understood by the health store."""

    TRADITIONAL_STRENGTH_TRAINING = "traditional_strength_training"
    FUNCTIONAL_STRENGTH_TRAINING = "functional_strength_training"


class HealthBridgeError(Exception):
    """Raised by HealthBridge implementations on any failure."""


class HealthBridge(Protocol):
    """Abstract interface for health-store workout tracking."""

    async def start_session(
        self,
        activity_type: WorkoutActivityType,
        start_date: datetime,
    ) -> str:
        """
        Begin tracking a workout.

        Args:
            activity_type: Kind of workout being tracked
            start_date: Session start time

        Returns:
            Opaque handle identifying the health session
        """
        ...

    async def pause_session(self, handle: str) -> None:
        ...

    async def resume_session(self, handle: str) -> None:
        ...

    async def end_session(
        self,
        handle: str,
        end_date: datetime,
        energy_kcal: Optional[float] = None,
        distance_m: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Finish tracking and write the workout sample.

        Args:
            handle: Handle returned by start_session
            end_date: Session end time
            energy_kcal: Active energy burned
            distance_m: Distance covered (unused for strength sessions)
            metadata: Extra values stored with the sample
        """
        ...

    async def cancel_session(self, handle: str) -> None:
        """Discard a tracked workout without saving a sample."""
        ...
