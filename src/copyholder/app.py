"""
Wiring for a running copyholder instance.

build_app() creates the database, store, clipboard adapter, scheduler, engine,
and presentation binding from settings, the same way for the CLI and tests.
"""

from dataclasses import dataclass
from logging import Logger as T_Logger
from typing import Optional

from sqlalchemy.engine import Engine

from .binding import HistoryBinding
from .clipboard import ClipboardAdapter, PyperclipClipboard
from .config import DatabaseSettings, HistorySettings, get_settings
from .database import DatabaseSessionGenerator
from .engine import HistoryEngine
from .logger import logger as package_logger
from .scheduler import Clock, Scheduler
from .store import HistoryStore


@dataclass
class CopyHolderApp:
    """Components of one copyholder instance."""

    db: DatabaseSessionGenerator
    store: HistoryStore
    clipboard: ClipboardAdapter
    scheduler: Scheduler
    engine: HistoryEngine
    binding: HistoryBinding

    def run(self) -> None:
        """Start the engine and run the scheduler until stopped."""
        self.engine.start()
        try:
            self.scheduler.run_forever()
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        self.engine.stop()
        self.scheduler.stop()
        self.binding.detach()


def build_app(
    history_settings: Optional[HistorySettings] = None,
    db_settings: Optional[DatabaseSettings] = None,
    clipboard: Optional[ClipboardAdapter] = None,
    clock: Optional[Clock] = None,
    db_engine: Optional[Engine] = None,
    logger: Optional[T_Logger] = None,
) -> CopyHolderApp:
    """
    Assemble a CopyHolderApp.

    Arguments:
        history_settings (Optional[HistorySettings]): Engine timing; loaded from config if omitted.
        db_settings (Optional[DatabaseSettings]): Database location; ignored when `db_engine` is given.
        clipboard (Optional[ClipboardAdapter]): Defaults to the pyperclip adapter.
        clock (Optional[Clock]): Defaults to the system clock.
        db_engine (Optional[Engine]): Existing SQLAlchemy engine, e.g. in-memory SQLite.
        logger (Optional[Logger]): Parent logger for every component.
    """
    logger = logger or package_logger
    history_settings = history_settings or get_settings(HistorySettings)
    if db_engine is not None:
        db = DatabaseSessionGenerator(engine=db_engine)
    else:
        db = DatabaseSessionGenerator(settings=db_settings or get_settings(DatabaseSettings))
    db.init_db()

    store = HistoryStore(db, logger)
    clipboard = clipboard or PyperclipClipboard(logger)
    scheduler = Scheduler(logger, clock)
    engine = HistoryEngine(store, clipboard, scheduler, history_settings, logger)
    binding = HistoryBinding(store, engine, logger)
    return CopyHolderApp(
        db=db,
        store=store,
        clipboard=clipboard,
        scheduler=scheduler,
        engine=engine,
        binding=binding,
    )


__all__ = ["CopyHolderApp", "build_app"]
