"""
Logging and error-tracking setup.

Call both once at process start:

    settings = get_settings()
    configure_logging(settings)
    init_sentry(settings)
"""

import logging

import sentry_sdk

from backend.settings import Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Set the root log level and format from settings."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    logger.debug(f"Logging configured at {settings.log_level}")


def init_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry SDK if DSN is configured.

    Returns:
        True if Sentry was initialized
    """
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
        profiles_sample_rate=0.1,
    )
    logger.info("Sentry initialized for workout session engine")
    return True
