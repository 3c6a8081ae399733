"""
Session Repository Interface (Port).

This module defines the abstract interface for workout session persistence.
Sessions are stored whole (exercises and sets embedded) and read back by the
history and statistics use cases.
"""

from enum import Enum
from typing import List, Optional, Protocol

from domain.models import WorkoutSession


class RepositoryErrorKind(str, Enum):
    """Category of a repository failure."""

    NOT_FOUND = "not_found"
    SAVE_FAILED = "save_failed"
    UPDATE_FAILED = "update_failed"
    FETCH_FAILED = "fetch_failed"
    DELETE_FAILED = "delete_failed"
    INVALID_DATA = "invalid_data"


class RepositoryError(Exception):
    """Raised by repository implementations when a storage operation fails."""

    def __init__(self, kind: RepositoryErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class SessionRepository(Protocol):
    """
    Abstract interface for workout session persistence.

    Implementations must round-trip every field: a session fetched after
    `save` compares equal to the one that was saved.
    """

    async def save(self, session: WorkoutSession) -> None:
        """
        Persist a new session.

        Args:
            session: Session to insert

        Raises:
            RepositoryError: SAVE_FAILED if the write fails
        """
        ...

    async def update(self, session: WorkoutSession) -> None:
        """
        Replace a stored session with the given state.

        Args:
            session: Session with an id already saved

        Raises:
            RepositoryError: NOT_FOUND if the id is unknown,
                UPDATE_FAILED if the write fails
        """
        ...

    async def fetch(self, session_id: str) -> Optional[WorkoutSession]:
        """
        Get a session by id.

        Args:
            session_id: Session UUID

        Returns:
            The session or None if not found

        Raises:
            RepositoryError: FETCH_FAILED or INVALID_DATA
        """
        ...

    async def fetch_all(self) -> List[WorkoutSession]:
        """
        Get every stored session regardless of state.

        Returns:
            All sessions, in no guaranteed order

        Raises:
            RepositoryError: FETCH_FAILED or INVALID_DATA
        """
        ...

    async def delete(self, session_id: str) -> None:
        """
        Delete a session.

        Args:
            session_id: Session UUID

        Raises:
            RepositoryError: NOT_FOUND or DELETE_FAILED
        """
        ...
