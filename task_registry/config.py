"""Configuration settings for the task registry.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file:

- ``DATABASE_PATH``, ``DATABASE_ECHO_SQL``, ``DATABASE_BUSY_TIMEOUT``
- ``LOGGING_LEVEL``, ``LOGGING_RICH_TRACEBACKS``
- ``TASK_REGISTRY_DEBUG_MODE`` and nested overrides such as
  ``TASK_REGISTRY_DATABASE__PATH``
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseSettings):
    """Database configuration for the task store."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_", validate_default=True)

    path: Path = Field(Path("data/tasks.db"), description="SQLite database file path")
    echo_sql: bool = Field(False, description="Enable SQL query logging for debugging")
    busy_timeout: float = Field(
        30.0,
        ge=0.1,
        le=300.0,
        description="Seconds to wait for a locked database before failing",
    )

    @field_validator("path")
    @classmethod
    def validate_db_path(cls, v: Path) -> Path:
        """Resolve the database path against the working directory.

        The directory is created when the database is opened, not here.
        """
        if not v.is_absolute():
            v = Path.cwd() / v
        return v

    @property
    def url(self) -> str:
        """SQLAlchemy connection URL for the configured path."""
        return f"sqlite:///{self.path}"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_")

    level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    rich_tracebacks: bool = Field(
        True, description="Render exception tracebacks with rich"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Expected one of {', '.join(VALID_LOG_LEVELS)}"
            )
        return level


class RegistrySettings(BaseSettings):
    """Root configuration combining all subsystem settings."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    debug_mode: bool = Field(False, description="Enable debug logging")
    config_version: str = Field("1.0.0", description="Configuration schema version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="TASK_REGISTRY_",
        extra="ignore",
        validate_default=True,
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def apply_debug_mode(self) -> "RegistrySettings":
        """Debug mode always logs at DEBUG."""
        if self.debug_mode:
            self.logging.level = "DEBUG"
        return self


@lru_cache(maxsize=1)
def get_settings() -> RegistrySettings:
    """Get cached global settings instance.

    Returns:
        Global RegistrySettings instance

    """
    return RegistrySettings()


__all__ = [
    "VALID_LOG_LEVELS",
    "DatabaseSettings",
    "LoggingSettings",
    "RegistrySettings",
    "get_settings",
]
