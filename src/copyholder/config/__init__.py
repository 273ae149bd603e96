"""
copyholder.config
Configuration and settings management for the clipboard history tracker.
Overview:
- Provides Pydantic-based settings classes for the history engine, the
    persistence layer, and application-wide paths and logging.
- Each settings class inherits from FactoryBaseSettings and supports environment
    variable overrides via Field aliases.
Contents:
- Settings Classes:
    - HistorySettings:
        Timing and retention for the history engine: poll interval, retention
        window, self-write suppression window, confirmation toast duration, and
        the preview width used by list rows.
    - DatabaseSettings:
        Location of the SQLite history database with a convenience database_url.
    - AppSettings:
        Global application settings including app root directory, environment,
        log level, and computed properties for logs and cache directories.
Design Notes:
- Defaults reproduce the reference behaviour (1s poll, 7 day retention, 1s
    suppression, 2s toast), so zero configuration is needed.
"""

from copyholder.imports import (
    timedelta,
    Path,
    Field,
)
from copyholder.config.base import APP_ENV, APP_ROOT
from copyholder.config.factory import FactoryBaseSettings
from copyholder.config.factory import get_settings, reload_settings  # noqa: F401


class HistorySettings(FactoryBaseSettings):
    """
    Configuration for the clipboard history engine.
    """

    poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Interval for polling the clipboard. (Seconds) [Default: 1.0]",
        alias="COPYHOLDER_POLL_INTERVAL",
    )
    retention_days: int = Field(
        default=7,
        ge=1,
        description="Entries older than this many days are pruned. [Default: 7]",
        alias="COPYHOLDER_RETENTION_DAYS",
    )
    suppression_window: float = Field(
        default=1.0,
        ge=0,
        description="Seconds the engine ignores the clipboard after writing to it. [Default: 1.0]",
        alias="COPYHOLDER_SUPPRESSION_WINDOW",
    )
    toast_duration: float = Field(
        default=2.0,
        ge=0,
        description="Seconds the copy confirmation stays visible. [Default: 2.0]",
        alias="COPYHOLDER_TOAST_DURATION",
    )
    preview_width: int = Field(
        default=80,
        ge=10,
        description="Maximum characters shown for an entry in the history list.",
        alias="COPYHOLDER_PREVIEW_WIDTH",
    )

    @property
    def retention(self) -> timedelta:
        """Retention window as a timedelta."""
        return timedelta(days=self.retention_days)


class DatabaseSettings(FactoryBaseSettings):
    """
    Database configuration settings.
    """

    db_path: Path = Field(
        default=APP_ROOT / ".cache" / "copyholder.db",
        description="Path to the SQLite database file holding the clipboard history.",
        alias="COPYHOLDER_DB_PATH",
    )

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for the history database."""
        return f"sqlite:///{self.db_path.as_posix()}"


class AppSettings(FactoryBaseSettings):
    """Application configuration settings."""

    app_root: Path = Field(
        default=Path(APP_ROOT),
        description="Root directory for application data storage.",
        alias="COPYHOLDER_ROOT",
    )
    environment: str = Field(
        default=APP_ENV,
        description="Current application environment (dev, test, prod).",
        alias="ENVIRONMENT",
    )
    log_level: str = Field(
        default="info",
        description="Log level for the application.",
        alias="COPYHOLDER_LOG_LEVEL",
    )

    @property
    def logs_dir(self) -> Path:
        """Base directory for logs."""
        return self.app_root / "logs"

    @property
    def cache_dir(self) -> Path:
        """Base directory for cache."""
        return self.app_root / ".cache"


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "HistorySettings",
    "get_settings",
    "reload_settings",
]
