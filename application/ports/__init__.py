"""
Repository and Service Interfaces (Ports) for the workout session engine.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, health store). Implementations are provided in
the infrastructure layer and, for tests, in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository

    class HistoryService:
        def __init__(self, session_repo: SessionRepository):
            self.session_repo = session_repo

        async def load(self):
            return await self.session_repo.fetch_all()
"""

# Session persistence
from application.ports.session_repository import (
    RepositoryError,
    RepositoryErrorKind,
    SessionRepository,
)

# Exercise catalog
from application.ports.exercise_catalog import ExerciseCatalogRepository

# Workout templates
from application.ports.workout_repository import WorkoutTemplateRepository

# Health store
from application.ports.health_bridge import (
    HealthBridge,
    HealthBridgeError,
    WorkoutActivityType,
)

__all__ = [
    # Sessions
    "SessionRepository",
    "RepositoryError",
    "RepositoryErrorKind",
    # Catalog
    "ExerciseCatalogRepository",
    # Templates
    "WorkoutTemplateRepository",
    # Health
    "HealthBridge",
    "HealthBridgeError",
    "WorkoutActivityType",
]
