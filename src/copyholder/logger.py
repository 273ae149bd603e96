"""
Logging configuration for copyholder.

setup_logging() applies a dictConfig with a JSON lines file handler and a plain
console handler, archives yesterday's log file, and trims old archives. Library
code only ever calls `logging.getLogger("copyholder")` (or `logger` below) and
`getChild`, so nothing is configured on import.
"""

from datetime import datetime
import logging
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from .config import AppSettings, get_settings
from .utils import get_time

LOGGER_NAME = "copyholder"
LOG_FILE_NAME = "copyholder.jsonl"

logger: T_Logger = logging.getLogger(LOGGER_NAME)
system_logger = logger.getChild("SYSTEM")


def build_config(log_file_path: Path, log_level: str, console: bool = True) -> dict:
    """dictConfig mapping for the given log file and level."""
    handlers = ["file", "console"] if console else ["file"]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
        },
        "handlers": {
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file_path),
                "formatter": "json",
                "level": log_level,
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": log_level,
            },
        },
        "loggers": {
            LOGGER_NAME: {
                "handlers": handlers,
                "level": log_level,
                "propagate": False,
            },
        },
    }


def setup_logging(
    settings: Optional[AppSettings] = None, console: bool = True
) -> T_Logger:
    """
    Configure the copyholder logger.

    Arguments:
        settings (Optional[AppSettings]): Source of the logs directory and level.
        console (bool): Also log to stderr. The live `watch` view turns this off.

    Returns:
        Logger: The package logger.
    """
    settings = settings or get_settings(AppSettings)
    log_file_path = settings.logs_dir / LOG_FILE_NAME
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    _archive_daily_log_file(log_file_path)
    _manage_logfile_archives(log_file_path)

    dictConfig(build_config(log_file_path, settings.log_level.upper(), console))
    system_logger.debug("Logger for copyholder initialized.")
    return logger


def _archive_daily_log_file(log_file_path: Path) -> Optional[Path]:
    """Archive the log file daily by renaming it with a timestamp."""
    system_logger.debug("Checking for log file to archive...")
    current_time = get_time()
    archive_files = sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    if archive_files:
        latest_archive = archive_files[0]
        timestamp_str = latest_archive.stem.replace(f"{log_file_path.stem}_", "")
        try:
            timestamp = datetime.strptime(timestamp_str, "%Y%m%d_%H%M%S").replace(
                tzinfo=current_time.tzinfo
            )
        except ValueError:
            system_logger.warning(
                f"Could not parse timestamp from archive file {latest_archive}, skipping timestamp check."
            )
            return None
        if (current_time - timestamp).total_seconds() < 24 * 3600:
            system_logger.debug(
                f"Latest archive {latest_archive} is less than 24 hours old, skipping archiving."
            )
            return None

    if log_file_path.exists():
        timestamp = current_time.strftime("%Y%m%d_%H%M%S")
        archive_path = log_file_path.with_name(f"{log_file_path.stem}_{timestamp}.jsonl")
        system_logger.debug(f"Archiving log file {log_file_path} to {archive_path}")
        log_file_path.rename(archive_path)
        return archive_path
    return None


def _manage_logfile_archives(log_file_path: Path, days_to_keep: int = 10) -> int:
    """Keep only the most recent log archives. Returns the number deleted."""
    system_logger.debug("Managing log file archives...")
    archive_files = sorted(
        log_file_path.parent.glob(f"{log_file_path.stem}_*.jsonl"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )
    if len(archive_files) <= days_to_keep:
        system_logger.debug("No old archive files to delete.")
        return 0
    for archive_file in archive_files[days_to_keep:]:
        system_logger.debug(f"Deleting old archive file: {archive_file}")
        archive_file.unlink()
    return len(archive_files) - days_to_keep
