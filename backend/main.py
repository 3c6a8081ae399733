"""
Session engine factory.

Builds the session lifecycle manager and the history/statistics use cases
over Supabase repositories. The factory pattern allows for:
- Easy testing with custom settings or an injected client
- Several engines with different configurations

Usage:
    from backend.main import create_engine
    from backend.settings import Settings

    # Default engine (uses get_settings())
    engine = create_engine()
    await engine.manager.restore_active_session()

    # Test engine with custom settings and a mock client
    test_settings = Settings(environment="test", _env_file=None)
    engine = create_engine(settings=test_settings, client=mock_client)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from supabase import Client, create_client

from application.ports import HealthBridge
from application.use_cases import (
    CalculateStatisticsUseCase,
    GetPersonalRecordsUseCase,
    GetSessionHistoryUseCase,
    SessionLifecycleManager,
)
from backend.observability import configure_logging, init_sentry
from backend.settings import Settings, get_settings
from infrastructure.db import (
    SupabaseExerciseCatalogRepository,
    SupabaseSessionRepository,
    SupabaseWorkoutTemplateRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionEngine:
    """The wired session manager and read-side use cases."""

    manager: SessionLifecycleManager
    history: GetSessionHistoryUseCase
    statistics: CalculateStatisticsUseCase
    personal_records: GetPersonalRecordsUseCase


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client from settings.

    Raises:
        RuntimeError: If Supabase credentials are not configured
    """
    if not settings.supabase_url or not settings.supabase_key:
        raise RuntimeError("Supabase credentials not configured")
    return create_client(settings.supabase_url, settings.supabase_key)


def create_engine(
    settings: Optional[Settings] = None,
    *,
    client: Optional[Client] = None,
    health_bridge: Optional[HealthBridge] = None,
) -> SessionEngine:
    """
    Create and configure a session engine.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        client: Supabase client; created from settings when omitted
        health_bridge: Platform health store adapter, if any

    Returns:
        Configured SessionEngine
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings)
    init_sentry(settings)

    if client is None:
        client = create_supabase_client(settings)

    session_repo = SupabaseSessionRepository(client, table=settings.sessions_table)
    catalog_repo = SupabaseExerciseCatalogRepository(client, table=settings.exercises_table)
    workout_repo = SupabaseWorkoutTemplateRepository(client, table=settings.workouts_table)
    tz = settings.timezone

    if health_bridge is None and settings.health_sync_enabled:
        logger.info("No health bridge configured, health sync disabled")

    engine = SessionEngine(
        manager=SessionLifecycleManager(
            session_repo=session_repo,
            catalog_repo=catalog_repo,
            workout_repo=workout_repo,
            health_bridge=health_bridge,
            settings=settings,
        ),
        history=GetSessionHistoryUseCase(session_repo, tz=tz),
        statistics=CalculateStatisticsUseCase(session_repo, tz=tz),
        personal_records=GetPersonalRecordsUseCase(session_repo),
    )
    logger.info(f"Session engine created ({settings.environment})")
    return engine
