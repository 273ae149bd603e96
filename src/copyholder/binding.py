# region Docstring
"""
copyholder.binding
Presentation binding between the history engine and a two-pane UI.
Overview:
- HistoryBinding keeps a snapshot of the stored entries (newest first), the
    current selection, the entry to show in the detail pane, and the visible
    confirmation toast. It re-fetches the list whenever the store reports a
    change, so an insert made by a tick is visible before the next render.
- It holds no rendering code; views read its properties and call select() and
    activate() in response to user gestures.
Contents:
- Classes:
    - HistoryBinding:
        entries, latest_entry, selected_entry_id, detail_entry, toast_message,
        matches, refresh, select, activate, detach.
"""
# endregion
# region Imports
from logging import Logger as T_Logger
from typing import Callable, Optional

from copyholder.engine import HistoryEngine
from copyholder.errors import PersistenceError
from copyholder.models import HistoryEntry, Toast
from copyholder.scheduler import ScheduledTask
from copyholder.store import HistoryStore

# endregion
# region History Binding


class HistoryBinding:
    __logger: T_Logger

    def __init__(
        self, store: HistoryStore, engine: HistoryEngine, logger: T_Logger
    ) -> None:
        self.__store = store
        self.__engine = engine
        self.__logger = logger.getChild(self.__class__.__name__)
        self.__entries: list[HistoryEntry] = []
        self.__toast: Optional[Toast] = None
        self.__toast_task: Optional[ScheduledTask] = None
        self.__version = 0
        self.__unsubscribers: list[Callable[[], None]] = [
            store.subscribe(self.refresh),
            engine.on_toast(self._show_toast),
            engine.on_selection(self._selection_changed),
        ]
        self.refresh()

    # region State
    @property
    def entries(self) -> list[HistoryEntry]:
        """Entries newest first, as of the last refresh."""
        return list(self.__entries)

    @property
    def latest_entry(self) -> Optional[HistoryEntry]:
        return self.__entries[0] if self.__entries else None

    @property
    def selected_entry_id(self) -> Optional[str]:
        return self.__engine.state.selected_entry_id

    @property
    def detail_entry(self) -> Optional[HistoryEntry]:
        """The selected entry if it is still stored, otherwise the newest entry."""
        selected = self.selected_entry_id
        if selected is not None:
            for entry in self.__entries:
                if entry.id == selected:
                    return entry
        return self.latest_entry

    @property
    def toast_message(self) -> Optional[str]:
        """Confirmation message to display, or None when no toast is visible."""
        return self.__toast.message if self.__toast is not None else None

    @property
    def version(self) -> int:
        """Incremented whenever anything a view shows may have changed."""
        return self.__version

    def matches(self, token: str) -> list[HistoryEntry]:
        """
        Entries a user-typed reference can mean.

        A row number as shown in the list (1 is the newest, no leading zero)
        names that row. Anything else is an id or an id prefix.

        Arguments:
            token (str): Row number, full id, or id prefix.

        Returns:
            list[HistoryEntry]: One entry when the reference is unambiguous.
        """
        token = token.strip()
        if not token:
            return []
        if token.isdigit() and not token.startswith("0"):
            row = int(token)
            if row <= len(self.__entries):
                return [self.__entries[row - 1]]
        for entry in self.__entries:
            if entry.id == token:
                return [entry]
        return [entry for entry in self.__entries if entry.id.startswith(token)]

    # endregion
    # region Commands
    def refresh(self) -> None:
        """Re-fetch the entry list from the store."""
        try:
            self.__entries = self.__store.list_all()
        except PersistenceError as e:
            self.__logger.warning("Keeping previous history snapshot. %s", str(e))
            return
        self.__version += 1

    def select(self, entry_id: Optional[str]) -> None:
        """Single activation: show an entry in the detail pane."""
        self.__engine.select(entry_id)

    def activate(self, entry_id: str) -> ScheduledTask:
        """Double activation: copy the entry back onto the clipboard."""
        return self.__engine.request_copy(entry_id)

    def detach(self) -> None:
        """Stop observing the store and the engine."""
        for unsubscribe in self.__unsubscribers:
            unsubscribe()
        self.__unsubscribers = []
        if self.__toast_task is not None:
            self.__toast_task.cancel()
            self.__toast_task = None

    # endregion
    # region Observers
    def _show_toast(self, toast: Toast) -> None:
        if self.__toast_task is not None:
            self.__toast_task.cancel()
        self.__toast = toast
        self.__version += 1
        self.__toast_task = self.__engine.scheduler.call_later(
            toast.duration, self._hide_toast, name="hide-toast"
        )

    def _hide_toast(self) -> None:
        self.__toast = None
        self.__toast_task = None
        self.__version += 1

    def _selection_changed(self, entry_id: Optional[str]) -> None:
        self.__version += 1

    # endregion


# endregion

__all__ = ["HistoryBinding"]
