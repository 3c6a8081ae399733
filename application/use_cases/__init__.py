"""
Application Use Cases for the workout session engine.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not transport payloads

Usage:
    from application.use_cases import (
        SessionLifecycleManager,
        GetSessionHistoryUseCase,
        CalculateStatisticsUseCase,
    )

    # Run a session
    manager = SessionLifecycleManager(
        session_repo=session_repo,
        catalog_repo=catalog_repo,
        workout_repo=workout_repo,
        health_bridge=health_bridge,
    )
    result = await manager.start_session(workout_id="w-123")

    # Read it back
    history = GetSessionHistoryUseCase(session_repo=session_repo)
    result = await history.execute(SessionHistoryFilter.recent(10))

    stats = CalculateStatisticsUseCase(session_repo=session_repo)
    result = await stats.execute(TimePeriod.MONTH)
"""

from application.use_cases.session_lifecycle import (
    SessionLifecycleManager,
    SessionOperationResult,
)
from application.use_cases.session_history import (
    GetSessionHistoryUseCase,
    SessionHistoryResult,
)
from application.use_cases.calculate_statistics import (
    CalculateStatisticsUseCase,
    CalculateStatisticsResult,
)
from application.use_cases.personal_records import (
    GetPersonalRecordsUseCase,
    PersonalRecordsResult,
)

__all__ = [
    # Session lifecycle
    "SessionLifecycleManager",
    "SessionOperationResult",
    # History
    "GetSessionHistoryUseCase",
    "SessionHistoryResult",
    # Statistics
    "CalculateStatisticsUseCase",
    "CalculateStatisticsResult",
    # Personal records
    "GetPersonalRecordsUseCase",
    "PersonalRecordsResult",
]
