# region Docstring
"""
copyholder.store
Persistent, ordered clipboard history backed by SQLAlchemy.
Overview:
- HistoryStore exclusively owns the HistoryEntry records. Every mutating call
    commits before it returns, so an entry reported as stored survives a crash
    immediately afterwards.
- Observers registered with subscribe() are called after every committed
    mutation; the presentation binding uses this to re-fetch the list.
Contents:
- Types:
    - StoreListener: Callable invoked with no arguments after a change.
- Classes:
    - HistoryStore:
        insert, list_all, get, exists, delete, delete_older_than, count, subscribe.
"""
# endregion
# region Imports
from datetime import datetime
from logging import Logger as T_Logger
from typing import Callable, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from copyholder.database import DatabaseSessionGenerator as DBSession
from copyholder.errors import PersistenceError
from copyholder.models import HistoryEntry, HistoryEntryEntity, new_entry_id
from copyholder.utils import ensure_utc

# endregion
# region History Store
StoreListener = Callable[[], None]


class HistoryStore:
    __db_session: DBSession
    __logger: T_Logger

    def __init__(self, db_session: DBSession, logger: T_Logger) -> None:
        self.__db_session = db_session
        self.__logger = logger.getChild(self.__class__.__name__)
        self.__listeners: list[StoreListener] = []

    # region Queries
    def list_all(self) -> list[HistoryEntry]:
        """
        Snapshot of every entry, newest capture first.

        Returns:
            list[HistoryEntry]: Entries sorted by created_at descending; entries
            sharing a timestamp are ordered newest insert first.

        Raises:
            PersistenceError: If the database cannot be read.
        """
        stmt = select(HistoryEntryEntity).order_by(
            HistoryEntryEntity.created_at.desc(), HistoryEntryEntity.seq.desc()
        )
        try:
            with self.__db_session.get_session() as session:
                return [entity.model for entity in session.scalars(stmt)]
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to list history. %s", str(e))
            raise PersistenceError(f"Failed to list history: {str(e)}") from e

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Return the entry with `entry_id`, or None if it is not stored."""
        stmt = select(HistoryEntryEntity).where(HistoryEntryEntity.id == entry_id)
        try:
            with self.__db_session.get_session() as session:
                entity = session.scalars(stmt).first()
                return entity.model if entity is not None else None
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to load entry %s. %s", entry_id, str(e))
            raise PersistenceError(f"Failed to load entry {entry_id}: {str(e)}") from e

    def exists(self, content: str) -> bool:
        """True if an entry with exactly this content (case-sensitive) is stored."""
        stmt = (
            select(HistoryEntryEntity.seq)
            .where(HistoryEntryEntity.content == content)
            .limit(1)
        )
        try:
            with self.__db_session.get_session() as session:
                return session.scalars(stmt).first() is not None
        except SQLAlchemyError as e:
            self.__logger.exception("Failed duplicate check. %s", str(e))
            raise PersistenceError(f"Failed duplicate check: {str(e)}") from e

    def count(self) -> int:
        """Number of stored entries."""
        stmt = select(func.count()).select_from(HistoryEntryEntity)
        try:
            with self.__db_session.get_session() as session:
                return session.scalar(stmt) or 0
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to count history. %s", str(e))
            raise PersistenceError(f"Failed to count history: {str(e)}") from e

    # endregion
    # region Mutations
    def insert(self, content: str, timestamp: datetime) -> str:
        """
        Append a new entry and commit it.

        Arguments:
            content (str): Clipboard text to store.
            timestamp (datetime): Capture time; naive values are taken as UTC.

        Returns:
            str: The id assigned to the new entry.

        Raises:
            PersistenceError: If the entry could not be committed.
        """
        entity = HistoryEntryEntity(
            id=new_entry_id(), content=content, created_at=ensure_utc(timestamp)
        )
        try:
            with self.__db_session.get_session() as session:
                try:
                    session.add(entity)
                    session.commit()
                except SQLAlchemyError:
                    session.rollback()
                    raise
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to insert entry. %s", str(e))
            raise PersistenceError(f"Failed to insert entry: {str(e)}") from e

        self.__logger.debug("Inserted entry %s (%d chars).", entity.id, len(content))
        self._notify()
        return entity.id

    def delete(self, entry_id: str) -> None:
        """
        Remove an entry. Deleting an id that is not stored is a no-op.

        Raises:
            PersistenceError: If the deletion could not be committed.
        """
        stmt = delete(HistoryEntryEntity).where(HistoryEntryEntity.id == entry_id)
        removed = self._execute_delete(stmt, f"entry {entry_id}")
        if removed:
            self.__logger.debug("Deleted entry %s.", entry_id)
            self._notify()

    def delete_older_than(self, cutoff: datetime) -> int:
        """
        Remove every entry captured strictly before `cutoff`.

        Returns:
            int: Number of entries removed.

        Raises:
            PersistenceError: If the deletion could not be committed.
        """
        stmt = delete(HistoryEntryEntity).where(
            HistoryEntryEntity.created_at < ensure_utc(cutoff)
        )
        removed = self._execute_delete(stmt, "expired entries")
        if removed:
            self.__logger.info("Pruned %d entries older than %s.", removed, cutoff)
            self._notify()
        return removed

    def _execute_delete(self, stmt, what: str) -> int:
        try:
            with self.__db_session.get_session() as session:
                try:
                    result = session.execute(stmt)
                    session.commit()
                except SQLAlchemyError:
                    session.rollback()
                    raise
                return result.rowcount or 0
        except SQLAlchemyError as e:
            self.__logger.exception("Failed to delete %s. %s", what, str(e))
            raise PersistenceError(f"Failed to delete {what}: {str(e)}") from e

    # endregion
    # region Change Notification
    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a callable invoked after every committed change.

        Returns:
            Callable[[], None]: Call it to unsubscribe.
        """
        self.__listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.__listeners:
                self.__listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self.__listeners):
            try:
                listener()
            except Exception as e:
                self.__logger.exception("Store listener failed. %s", str(e))

    # endregion


# endregion

__all__ = ["HistoryStore", "StoreListener"]
