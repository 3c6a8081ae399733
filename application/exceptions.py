"""
Application error taxonomy for the session lifecycle.

All errors raised by SessionLifecycleManager derive from SessionError so
callers can catch the whole family with a single except clause.
Validation errors are raised before any state is mutated.
"""

from typing import Optional

from application.ports.session_repository import RepositoryError
from application.ports.health_bridge import HealthBridgeError


class SessionError(Exception):
    """Base class for session lifecycle errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidStateTransition(SessionError):
    """Raised when an operation is not allowed in the current session state."""

    def __init__(self, operation: str, state: Optional[str]):
        current = state or "no session"
        super().__init__(f"Cannot {operation} while session is {current}")
        self.operation = operation
        self.state = state


class NoActiveSession(InvalidStateTransition):
    """Raised when an operation requires a session but none is open."""

    def __init__(self, operation: str):
        super().__init__(operation, None)


class SessionAlreadyActive(SessionError):
    """Raised when starting a session while another one is active or paused."""

    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} is already in progress")
        self.session_id = session_id


class NotFoundError(SessionError):
    """Base class for lookups that found nothing."""

    kind = "entity"

    def __init__(self, identifier: str):
        super().__init__(f"{self.kind.capitalize()} not found: {identifier}")
        self.identifier = identifier


class ExerciseNotFound(NotFoundError):
    kind = "exercise"


class SetNotFound(NotFoundError):
    kind = "set"


class WorkoutNotFound(NotFoundError):
    kind = "workout"


class InvalidInput(SessionError):
    """Raised when operation arguments are rejected."""


class PersistenceFailure(SessionError):
    """
    Raised when the session repository fails.

    The in-memory session keeps the mutation; a later successful write
    persists it.
    """

    def __init__(self, operation: str, cause: RepositoryError):
        super().__init__(f"Failed to persist session ({operation}): {cause}")
        self.operation = operation
        self.cause = cause


class HealthBridgeFailure(SessionError):
    """
    Advisory failure of the external health store.

    Returned in SessionOperationResult.health_error rather than raised; the
    local transition it accompanies has already succeeded.
    """

    def __init__(self, operation: str, cause: HealthBridgeError):
        super().__init__(f"Health sync failed ({operation}): {cause}")
        self.operation = operation
        self.cause = cause
