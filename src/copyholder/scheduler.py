# region Docstring
"""
copyholder.scheduler
Single-threaded delayed-task queue driving the history engine.
Overview:
- Everything the engine does runs as a task on one Scheduler: the periodic
    polling tick, out-of-band manual copies, and the one-shot actions that lift
    the suppression window and hide the confirmation toast. Tasks run one at a
    time, so a tick, a sweep, and a manual copy never interleave.
- Time comes from an injected Clock. VirtualClock makes the whole engine
    deterministic under test: Scheduler.advance() moves virtual time forward and
    runs every task that falls due on the way, in order.
Contents:
- Clocks:
    - Clock: monotonic seconds for scheduling, wall time for timestamps, sleep.
    - SystemClock: the real clock.
    - VirtualClock: manually advanced clock starting at a fixed wall time.
- Scheduling:
    - ScheduledTask: handle returned for every scheduled action; cancel().
    - Scheduler: call_soon, call_later, call_every, run_pending, advance,
        run_forever, stop.
Design Notes:
- Built on the standard library sched.scheduler, which takes the time and
    delay functions as parameters; tasks due at the same instant run in the
    order they were scheduled.
- An exception raised by a task is logged and the scheduler keeps running.
"""
# endregion
# region Imports
import sched
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from logging import Logger as T_Logger
from typing import Any, Callable, Optional

from copyholder.utils import ensure_utc, get_time

# endregion
# region Clocks


class Clock(ABC):
    """Time source for the scheduler and the engine."""

    @abstractmethod
    def monotonic(self) -> float:
        """Seconds on a monotonic timeline, used for scheduling."""
        ...

    @abstractmethod
    def now(self) -> datetime:
        """Current wall time (UTC), used for entry timestamps and retention."""
        ...

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block (or, for virtual clocks, move time) for `seconds`."""
        ...


class SystemClock(Clock):
    def monotonic(self) -> float:
        return time.monotonic()

    def now(self) -> datetime:
        return get_time()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class VirtualClock(Clock):
    """
    Clock that only moves when told to.

    Attributes:
        start (datetime): Wall time at offset zero.
        offset (float): Seconds elapsed since `start`.
    """

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.start = ensure_utc(start) if start is not None else get_time()
        self.offset = 0.0

    def monotonic(self) -> float:
        return self.offset

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.offset)

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            self.offset += seconds


# endregion
# region Scheduled Tasks


class ScheduledTask:
    """
    Handle for an action queued on a Scheduler.

    Attributes:
        name (str): Label used in log messages.
        interval (Optional[float]): Period in seconds for repeating tasks.
        cancelled (bool): True once cancel() has been called.
    """

    def __init__(
        self, scheduler: "Scheduler", name: str, interval: Optional[float] = None
    ) -> None:
        self._scheduler = scheduler
        self._event: Optional[sched.Event] = None
        self.name = name
        self.interval = interval
        self.cancelled = False

    @property
    def due(self) -> Optional[float]:
        """Monotonic time the task next runs at, or None if it is not queued."""
        if self.cancelled or self._event is None:
            return None
        return self._event.time

    def cancel(self) -> None:
        """Remove the task from the queue. Safe to call more than once."""
        self._scheduler._cancel(self)

    def __repr__(self) -> str:
        return f"<ScheduledTask(name='{self.name}', due={self.due}, interval={self.interval})>"


# endregion
# region Scheduler


class Scheduler:
    __logger: T_Logger

    def __init__(self, logger: T_Logger, clock: Optional[Clock] = None) -> None:
        self.clock: Clock = clock or SystemClock()
        self.__logger = logger.getChild(self.__class__.__name__)
        self.__queue = sched.scheduler(self.clock.monotonic, self.clock.sleep)
        self.__running = False

    @property
    def pending(self) -> int:
        """Number of queued tasks."""
        return len(self.__queue.queue)

    @property
    def running(self) -> bool:
        return self.__running

    # region Scheduling
    def call_soon(self, action: Callable[..., Any], *args: Any, name: str = "") -> ScheduledTask:
        """Run `action` as the next task, after anything already due."""
        return self.call_later(0, action, *args, name=name)

    def call_later(
        self, delay: float, action: Callable[..., Any], *args: Any, name: str = ""
    ) -> ScheduledTask:
        """Run `action` once, `delay` seconds from now."""
        task = ScheduledTask(self, name or getattr(action, "__name__", "task"))
        task._event = self.__queue.enter(
            max(delay, 0), 0, self._run_task, (task, action, args)
        )
        return task

    def call_every(
        self,
        interval: float,
        action: Callable[..., Any],
        *args: Any,
        first_delay: Optional[float] = None,
        name: str = "",
    ) -> ScheduledTask:
        """
        Run `action` every `interval` seconds until the task is cancelled.

        Arguments:
            interval (float): Period in seconds, must be positive.
            first_delay (Optional[float]): Delay before the first run. Defaults to `interval`.
        """
        if interval <= 0:
            raise ValueError("interval must be > 0")
        task = ScheduledTask(
            self, name or getattr(action, "__name__", "task"), interval=interval
        )
        delay = interval if first_delay is None else max(first_delay, 0)
        task._event = self.__queue.enter(delay, 0, self._run_task, (task, action, args))
        return task

    def _cancel(self, task: ScheduledTask) -> None:
        if task.cancelled:
            return
        task.cancelled = True
        if task._event is not None:
            try:
                self.__queue.cancel(task._event)
            except ValueError:
                # Already popped; _run_task checks `cancelled`.
                pass
            task._event = None

    def _run_task(
        self, task: ScheduledTask, action: Callable[..., Any], args: tuple
    ) -> None:
        if task.cancelled:
            return
        if task.interval is not None:
            previous = task._event.time if task._event is not None else self.clock.monotonic()
            next_time = max(previous + task.interval, self.clock.monotonic())
            task._event = self.__queue.enterabs(
                next_time, 0, self._run_task, (task, action, args)
            )
        else:
            task._event = None
        try:
            action(*args)
        except Exception as e:
            self.__logger.exception("Scheduled task %s failed. %s", task.name, str(e))

    # endregion
    # region Running
    def run_pending(self) -> Optional[float]:
        """
        Run every task that is due now.

        Returns:
            Optional[float]: Seconds until the next queued task, or None if the queue is empty.
        """
        return self.__queue.run(blocking=False)

    def advance(self, seconds: float) -> None:
        """
        Move the clock forward by `seconds`, running each task as it falls due.

        With a VirtualClock this is instantaneous; with the SystemClock it sleeps.
        """
        remaining = float(seconds)
        while True:
            next_delay = self.run_pending()
            if next_delay is None or next_delay > remaining:
                self.clock.sleep(remaining)
                self.run_pending()
                return
            self.clock.sleep(next_delay)
            remaining -= next_delay

    def run_forever(self, idle_sleep: float = 0.25) -> None:
        """Run tasks as they fall due until stop() is called."""
        self.__running = True
        self.__logger.debug("Scheduler started.")
        try:
            while self.__running:
                next_delay = self.run_pending()
                if not self.__running:
                    break
                wait = idle_sleep if next_delay is None else min(next_delay, idle_sleep)
                self.clock.sleep(wait)
        finally:
            self.__running = False
            self.__logger.debug("Scheduler stopped.")

    def stop(self) -> None:
        """Ask run_forever() to return after the current task."""
        self.__running = False

    # endregion


# endregion

__all__ = ["Clock", "ScheduledTask", "Scheduler", "SystemClock", "VirtualClock"]
