# region Docstring
"""
copyholder.controls
Typed commands for the live `watch` view.
Overview:
- A daemon thread reads lines from stdin into a queue. A periodic scheduler
    task drains the queue, so every command runs on the scheduler thread
    between ticks, like everything else that touches the engine.
- Commands (rows are numbered as in the list, 1 is the newest):
    <row|id>        show the entry in the detail pane
    c <row|id>      copy the entry back to the clipboard
    -               follow the newest entry again
Contents:
- Classes:
    - ConsoleControls: start, stop, feed, read_lines, drain, handle, status.
"""
# endregion
# region Imports
import queue
import sys
import threading
from logging import Logger as T_Logger
from typing import Optional, TextIO

from copyholder.binding import HistoryBinding
from copyholder.scheduler import ScheduledTask, Scheduler

# endregion
# region Console Controls

HELP = "<row> view · c <row> copy · - newest · Ctrl+C quit"
COPY_COMMANDS = {"c", "copy"}


class ConsoleControls:
    __logger: T_Logger

    def __init__(
        self,
        binding: HistoryBinding,
        scheduler: Scheduler,
        logger: T_Logger,
        stream: Optional[TextIO] = None,
        drain_interval: float = 0.1,
    ) -> None:
        self.binding = binding
        self.scheduler = scheduler
        self.__logger = logger.getChild(self.__class__.__name__)
        self.__stream = stream
        self.__drain_interval = drain_interval
        self.__lines: "queue.Queue[str]" = queue.Queue()
        self.__task: Optional[ScheduledTask] = None
        self.__reader: Optional[threading.Thread] = None
        self.status: str = HELP

    def start(self) -> None:
        """Start reading input and draining it on the scheduler."""
        if self.__task is not None:
            return
        self.__reader = threading.Thread(target=self.read_lines, name="copyholder-input", daemon=True)
        self.__reader.start()
        self.__task = self.scheduler.call_every(self.__drain_interval, self.drain, name="controls")

    def stop(self) -> None:
        if self.__task is not None:
            self.__task.cancel()
            self.__task = None

    def feed(self, line: str) -> None:
        """Queue one command line."""
        self.__lines.put(line)

    def read_lines(self) -> None:
        """Queue every line of the input stream until it is closed."""
        stream = self.__stream or sys.stdin
        for line in stream:
            self.feed(line)
        self.__logger.debug("Input stream closed.")

    def drain(self) -> None:
        while True:
            try:
                line = self.__lines.get_nowait()
            except queue.Empty:
                return
            self.handle(line)

    def handle(self, line: str) -> bool:
        """
        Run one command line.

        Returns:
            bool: False if the line was not understood; `status` says why.
        """
        words = line.split()
        if not words:
            return False
        if words == ["-"]:
            self.binding.select(None)
            self.status = HELP
            return True

        copy = words[0].lower() in COPY_COMMANDS
        if copy:
            words = words[1:]
        if len(words) != 1:
            self.status = f"Unknown command: {line.strip()}"
            return False

        token = words[0]
        found = self.binding.matches(token)
        if len(found) != 1:
            self.status = f"No entry matches {token}" if not found else f"Ambiguous id prefix {token}"
            self.__logger.debug(self.status)
            return False

        entry = found[0]
        if copy:
            self.binding.activate(entry.id)
        else:
            self.binding.select(entry.id)
        self.status = HELP
        return True


# endregion

__all__ = ["ConsoleControls", "HELP"]
