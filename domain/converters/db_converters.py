"""
Converters: Database row format <-> domain models.

Provides bidirectional conversion between Supabase database rows and the
session, catalog and template domain models.

Database schema (workout_sessions table):
- id: UUID
- workout_id: UUID of the template (nullable)
- workout_name: Name snapshot
- start_date, end_date: Timestamps (end_date null while running)
- state: active | paused | completed | cancelled
- exercises: JSONB list of exercises with nested sets
- health_session_id: External health-tracking handle (nullable)
- active_energy_kcal: Energy reported to the health store (nullable)
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from domain.models import CatalogExercise, WorkoutSession, WorkoutTemplate


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            # Postgres/Supabase may return a trailing Z
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def session_to_db_row(session: WorkoutSession) -> Dict[str, Any]:
    """
    Convert a WorkoutSession to a database row.

    Nested exercises and sets are stored as JSON in a single column so a
    session is always written atomically.

    Examples:
        >>> row = session_to_db_row(WorkoutSession(workout_name="Push"))
        >>> row["state"]
        'active'
    """
    data = session.model_dump(mode="json")
    return {
        "id": data["id"],
        "workout_id": data["workout_id"],
        "workout_name": data["workout_name"],
        "start_date": data["start_date"],
        "end_date": data["end_date"],
        "state": data["state"],
        "exercises": data["exercises"],
        "health_session_id": data["health_session_id"],
        "active_energy_kcal": data["active_energy_kcal"],
    }


def db_row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """
    Convert a database row to a WorkoutSession.

    Raises:
        ValueError: If the row does not describe a valid session.
    """
    try:
        return WorkoutSession.model_validate(
            {
                "id": row["id"],
                "workout_id": row.get("workout_id"),
                "workout_name": row.get("workout_name"),
                "start_date": _parse_datetime(row.get("start_date")),
                "end_date": _parse_datetime(row.get("end_date")),
                "state": row.get("state"),
                "exercises": row.get("exercises") or [],
                "health_session_id": row.get("health_session_id"),
                "active_energy_kcal": row.get("active_energy_kcal"),
            }
        )
    except (KeyError, ValidationError) as e:
        raise ValueError(f"Invalid session row: {e}") from e


def db_row_to_catalog_exercise(row: Dict[str, Any]) -> CatalogExercise:
    """Convert an exercises table row to a CatalogExercise."""
    return CatalogExercise(
        id=str(row["id"]),
        name=row.get("name") or "Exercise",
        last_used_weight=row.get("last_used_weight"),
        last_used_reps=row.get("last_used_reps"),
        last_used_set_count=row.get("last_used_set_count"),
        last_used_rest_time=row.get("last_used_rest_time"),
        last_used_at=_parse_datetime(row.get("last_used_at")),
    )


def db_row_to_workout_template(row: Dict[str, Any]) -> WorkoutTemplate:
    """Convert a workouts table row (exercises as JSON) to a WorkoutTemplate."""
    return WorkoutTemplate(
        id=str(row["id"]),
        name=row.get("name") or "Workout",
        exercises=row.get("exercises") or [],
        default_rest_time=row.get("default_rest_time") or 90.0,
        notes=row.get("notes"),
        updated_at=_parse_datetime(row.get("updated_at")),
    )
