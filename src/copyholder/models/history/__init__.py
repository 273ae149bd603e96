"""
copyholder.models.history
Package initialization for clipboard history persistence and domain models.
Contents:
- Entity Models:
    - HistoryEntryEntity:
        Database entity representing a single captured clipboard snippet.
- Domain Models:
    - HistoryEntry:
        Frozen Pydantic model handed out by the history store.
"""

from .clipboard_history import (  # noqa: F401
    HistoryEntry,
    HistoryEntryEntity,
    new_entry_id,
)


__entities__ = ["HistoryEntryEntity"]
__models__ = ["HistoryEntry"]
__all__ = [*__entities__, *__models__, "new_entry_id"]
