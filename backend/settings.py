"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() wherever a shared, cached instance is wanted.

Usage:
    from backend.settings import get_settings, Settings

    # Cached, module-level access
    settings = get_settings()
    print(settings.sessions_table)

    # Explicit instance (tests)
    settings = Settings(environment="test", _env_file=None)
"""

from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )
    sessions_table: str = Field(
        default="workout_sessions",
        description="Table storing workout sessions",
    )
    exercises_table: str = Field(
        default="exercises",
        description="Table storing the exercise catalog",
    )
    workouts_table: str = Field(
        default="workouts",
        description="Table storing workout templates",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Session Lifecycle
    # -------------------------------------------------------------------------
    health_sync_enabled: bool = Field(
        default=True,
        description="Mirror sessions into the external health store",
    )
    default_body_weight_kg: float = Field(
        default=80.0,
        gt=0,
        description="Body weight used for the active energy estimate",
    )
    calorie_met_value: float = Field(
        default=6.0,
        gt=0,
        description="MET value used for the active energy estimate",
    )
    retain_cancelled_sessions: bool = Field(
        default=True,
        description="Keep cancelled sessions as records instead of deleting them",
    )
    max_exercise_notes_length: int = Field(
        default=500,
        ge=1,
        le=500,
        description="Maximum length of per-exercise notes",
    )

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------
    statistics_timezone: str = Field(
        default="UTC",
        description="IANA time zone used for calendar days and periods",
    )

    @property
    def timezone(self) -> ZoneInfo:
        """Statistics time zone as a tzinfo."""
        return ZoneInfo(self.statistics_timezone)

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("statistics_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the time zone name is known to zoneinfo."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone '{v}'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
