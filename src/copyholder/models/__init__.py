# region Docstring
"""
copyholder.models
Centralized imports for the Pydantic models and SQLAlchemy entities.

Contents:
- History Models:
    - HistoryEntryEntity / HistoryEntry: persisted clipboard snippets.
- Engine Models:
    - EngineState, EngineStatus, TickResult, Toast: in-memory engine values.

Exports:
- __entities__: SQLAlchemy entity class names for database operations
- __models__: Pydantic model class names for application logic
- __all__: Combined export list
"""
# endregion
# region Imports
from .engine import EngineState, EngineStatus, TickResult, Toast  # noqa: F401
from .history import HistoryEntry, HistoryEntryEntity, new_entry_id  # noqa: F401

# endregion

__entities__ = ["HistoryEntryEntity"]
__models__ = ["EngineState", "EngineStatus", "HistoryEntry", "TickResult", "Toast"]
__all__ = [*__entities__, *__models__, "new_entry_id"]
