# region Docstring
"""
copyholder.engine
The clipboard history engine: polling, de-duplication, self-write suppression,
and retention.
Overview:
- HistoryEngine samples the clipboard on every tick and records text it has
    not seen before. One tick runs as a single task on the Scheduler, so the
    read, the duplicate check, and the insert of one tick complete before the
    next tick, a sweep, or a manual copy can start.
- A manual copy writes a stored entry back onto the clipboard. While the
    suppression window is open ticks are skipped, and the copied text becomes
    last_observed_content, so the engine never re-captures its own write.
- The retention sweep deletes entries older than the retention window. It runs
    once at start-up and after every tick; deleting is idempotent so repeated
    sweeps are harmless.
Contents:
- Types:
    - ToastListener, SelectionListener: observer callables.
- Classes:
    - HistoryEngine:
        start, stop, tick, sweep, manual_copy, request_copy, select,
        on_toast, on_selection.
Failure Semantics:
- Clipboard read failures count as "no content this tick".
- Store failures are logged and abandon the tick; last_observed_content only
    moves after a successful insert or a confirmed duplicate, so the same text
    is retried on the next tick.
- A failed manual copy shows no confirmation toast.
"""
# endregion
# region Imports
from logging import Logger as T_Logger
from typing import Callable, Optional

from copyholder.clipboard import ClipboardAdapter
from copyholder.config import HistorySettings
from copyholder.errors import AdapterWriteError, PersistenceError
from copyholder.models import (
    EngineState,
    EngineStatus,
    HistoryEntry,
    TickResult,
    Toast,
)
from copyholder.scheduler import ScheduledTask, Scheduler
from copyholder.store import HistoryStore

# endregion
# region Constants
COPY_CONFIRMATION = "Copied to clipboard"
"""Message shown after a successful manual copy."""

ToastListener = Callable[[Toast], None]
SelectionListener = Callable[[Optional[str]], None]

# endregion
# region History Engine


class HistoryEngine:
    __logger: T_Logger

    def __init__(
        self,
        store: HistoryStore,
        clipboard: ClipboardAdapter,
        scheduler: Scheduler,
        settings: HistorySettings,
        logger: T_Logger,
    ) -> None:
        self.store = store
        self.clipboard = clipboard
        self.scheduler = scheduler
        self.settings = settings
        self.state = EngineState()
        self.__logger = logger.getChild(self.__class__.__name__)
        self.__tick_task: Optional[ScheduledTask] = None
        self.__release_task: Optional[ScheduledTask] = None
        self.__toast_listeners: list[ToastListener] = []
        self.__selection_listeners: list[SelectionListener] = []

    # region Lifecycle
    @property
    def started(self) -> bool:
        return self.__tick_task is not None

    def start(self) -> None:
        """Sweep expired entries once, then tick every poll interval."""
        if self.started:
            return
        self.sweep()
        self.__tick_task = self.scheduler.call_every(
            self.settings.poll_interval, self.tick, name="history-tick"
        )
        self.__logger.info(
            "History engine started (poll=%ss, retention=%sd).",
            self.settings.poll_interval,
            self.settings.retention_days,
        )

    def stop(self) -> None:
        """Stop polling. Pending one-shot actions are left to run or be dropped."""
        if self.__tick_task is not None:
            self.__tick_task.cancel()
            self.__tick_task = None
            self.__logger.info("History engine stopped.")

    # endregion
    # region Polling
    def tick(self) -> TickResult:
        """
        One polling cycle followed by a retention sweep.

        Returns:
            TickResult: What the polling cycle did.
        """
        try:
            result = self._poll()
        finally:
            if self.state.status != EngineStatus.SUPPRESSED:
                self.state.status = EngineStatus.IDLE
            self.sweep()
        if result in (TickResult.INSERTED, TickResult.FAILED):
            self.__logger.debug("Tick result: %s", result.value)
        return result

    def _poll(self) -> TickResult:
        if self.state.suppress_writes:
            self.state.status = EngineStatus.SUPPRESSED
            return TickResult.SUPPRESSED

        self.state.status = EngineStatus.POLLING
        content = self.clipboard.read_text()
        if content is None:
            return TickResult.EMPTY
        if content == self.state.last_observed_content:
            return TickResult.UNCHANGED

        self.state.status = EngineStatus.EVALUATING
        try:
            if self.store.exists(content):
                self.state.last_observed_content = content
                return TickResult.DUPLICATE
            self.store.insert(content, self.scheduler.clock.now())
        except PersistenceError as e:
            self.__logger.warning("Abandoning tick, store unavailable. %s", str(e))
            return TickResult.FAILED

        self.state.last_observed_content = content
        self._set_selection(None)
        self.__logger.info("Captured new clipboard entry (%d chars).", len(content))
        return TickResult.INSERTED

    # endregion
    # region Retention
    def sweep(self) -> int:
        """
        Delete every entry captured before now minus the retention window.

        Returns:
            int: Number of entries removed (0 if the store is unavailable).
        """
        cutoff = self.scheduler.clock.now() - self.settings.retention
        try:
            removed = self.store.delete_older_than(cutoff)
        except PersistenceError as e:
            self.__logger.warning("Retention sweep skipped. %s", str(e))
            return 0
        if removed and self.state.selected_entry_id is not None:
            if self._lookup(self.state.selected_entry_id) is None:
                self._set_selection(None)
        return removed

    # endregion
    # region Manual Copy
    def request_copy(self, entry_id: str) -> ScheduledTask:
        """Queue a manual copy so it runs between ticks."""
        return self.scheduler.call_soon(self.manual_copy, entry_id, name="manual-copy")

    def manual_copy(self, entry_id: str) -> bool:
        """
        Put a stored entry back on the clipboard without creating a new entry.

        Arguments:
            entry_id (str): Id of the entry to copy.

        Returns:
            bool: True if the clipboard was written.
        """
        entry = self._lookup(entry_id)
        if entry is None:
            self.__logger.warning("Manual copy ignored, entry %s not found.", entry_id)
            return False

        self.state.suppress_writes = True
        self.state.status = EngineStatus.SUPPRESSED
        self._schedule_release()
        try:
            self.clipboard.write_text(entry.content)
        except AdapterWriteError as e:
            self.__logger.error("Manual copy of entry %s failed. %s", entry_id, str(e))
            return False

        self.state.last_observed_content = entry.content
        self._set_selection(entry.id)
        self._emit_toast(Toast(message=COPY_CONFIRMATION, duration=self.settings.toast_duration))
        self.__logger.info("Copied entry %s back to the clipboard.", entry_id)
        return True

    def _schedule_release(self) -> None:
        if self.__release_task is not None:
            self.__release_task.cancel()
        self.__release_task = self.scheduler.call_later(
            self.settings.suppression_window, self._release, name="release-suppression"
        )

    def _release(self) -> None:
        self.__release_task = None
        self.state.suppress_writes = False
        self.state.status = EngineStatus.IDLE

    # endregion
    # region Selection
    def select(self, entry_id: Optional[str]) -> None:
        """Show `entry_id` in the detail view (None follows the newest entry).

        Ids that are not stored are ignored and the current selection is kept.
        """
        if entry_id is not None and self._lookup(entry_id) is None:
            self.__logger.debug("Selection ignored, entry %s not found.", entry_id)
            return
        self._set_selection(entry_id)

    def _set_selection(self, entry_id: Optional[str]) -> None:
        if self.state.selected_entry_id == entry_id:
            return
        self.state.selected_entry_id = entry_id
        for listener in list(self.__selection_listeners):
            try:
                listener(entry_id)
            except Exception as e:
                self.__logger.exception("Selection listener failed. %s", str(e))

    def _lookup(self, entry_id: str) -> Optional[HistoryEntry]:
        try:
            return self.store.get(entry_id)
        except PersistenceError as e:
            self.__logger.warning("Could not load entry %s. %s", entry_id, str(e))
            return None

    # endregion
    # region Observers
    def on_toast(self, listener: ToastListener) -> Callable[[], None]:
        """Register a listener for confirmation toasts. Returns an unsubscribe callable."""
        return self._subscribe(self.__toast_listeners, listener)

    def on_selection(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a listener for selection changes. Returns an unsubscribe callable."""
        return self._subscribe(self.__selection_listeners, listener)

    @staticmethod
    def _subscribe(listeners: list, listener: Callable) -> Callable[[], None]:
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _emit_toast(self, toast: Toast) -> None:
        for listener in list(self.__toast_listeners):
            try:
                listener(toast)
            except Exception as e:
                self.__logger.exception("Toast listener failed. %s", str(e))

    # endregion


# endregion

__all__ = ["COPY_CONFIRMATION", "HistoryEngine", "SelectionListener", "ToastListener"]
