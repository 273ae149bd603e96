import logging
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from copyholder.binding import HistoryBinding
from copyholder.clipboard import MemoryClipboard
from copyholder.config import HistorySettings, reload_settings
from copyholder.database import Base, DatabaseSessionGenerator
from copyholder.engine import HistoryEngine
from copyholder.scheduler import Scheduler, VirtualClock
from copyholder.store import HistoryStore

START = datetime(2025, 7, 15, 12, 0, 0, tzinfo=timezone.utc)
"""Wall time at which every virtual clock starts."""

SETTINGS_ENV_VARS = [
    "COPYHOLDER_POLL_INTERVAL",
    "COPYHOLDER_RETENTION_DAYS",
    "COPYHOLDER_SUPPRESSION_WINDOW",
    "COPYHOLDER_TOAST_DURATION",
    "COPYHOLDER_PREVIEW_WIDTH",
    "COPYHOLDER_DB_PATH",
    "COPYHOLDER_LOG_LEVEL",
    "COPYHOLDER_ROOT",
    "COPYHOLDER_CONFIG",
]


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Clear settings env vars and the settings cache around every test."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture(scope="session")
def test_database_url():
    """Provide a test database URL (in-memory SQLite)."""
    return "sqlite:///:memory:"


@pytest.fixture(scope="session")
def engine(test_database_url):
    """Create a test database engine."""
    engine = create_engine(
        test_database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> DatabaseSessionGenerator:
    """Session generator over a freshly created schema for each test."""
    generator = DatabaseSessionGenerator(engine=engine)
    generator.init_db()
    try:
        yield generator
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests")


@pytest.fixture
def store(db, logger) -> HistoryStore:
    return HistoryStore(db, logger)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock(start=START)


@pytest.fixture
def scheduler(logger, clock) -> Scheduler:
    return Scheduler(logger, clock)


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def history_settings() -> HistorySettings:
    return HistorySettings()


@pytest.fixture
def history_engine(store, clipboard, scheduler, history_settings, logger) -> HistoryEngine:
    return HistoryEngine(store, clipboard, scheduler, history_settings, logger)


@pytest.fixture
def binding(store, history_engine, logger) -> HistoryBinding:
    binding = HistoryBinding(store, history_engine, logger)
    yield binding
    binding.detach()
