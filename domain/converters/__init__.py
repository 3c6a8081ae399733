"""
Domain converters between database rows and domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import session_to_db_row, db_row_to_session

    >>> row = session_to_db_row(session)
    >>> session = db_row_to_session(row)
"""

from domain.converters.db_converters import (
    db_row_to_catalog_exercise,
    db_row_to_session,
    db_row_to_workout_template,
    session_to_db_row,
)

__all__ = [
    "session_to_db_row",
    "db_row_to_session",
    "db_row_to_catalog_exercise",
    "db_row_to_workout_template",
]
