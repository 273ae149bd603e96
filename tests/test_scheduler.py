"""
Tests for the Scheduler and clocks: ordering, periodic tasks, cancellation,
and virtual time.
"""

from datetime import timedelta

import pytest

from copyholder.scheduler import Scheduler, SystemClock, VirtualClock

from .conftest import START


class TestVirtualClock:
    def test_starts_at_given_time(self, clock):
        assert clock.now() == START
        assert clock.monotonic() == 0.0

    def test_sleep_moves_time(self, clock):
        clock.sleep(1.5)
        assert clock.monotonic() == 1.5
        assert clock.now() == START + timedelta(seconds=1.5)

    def test_negative_sleep_ignored(self, clock):
        clock.sleep(-3)
        assert clock.monotonic() == 0.0


class TestScheduling:
    def test_call_later_runs_when_due(self, scheduler):
        ran = []
        scheduler.call_later(2, ran.append, "x")

        scheduler.advance(1.5)
        assert ran == []
        scheduler.advance(0.5)
        assert ran == ["x"]

    def test_tasks_run_in_due_order(self, scheduler):
        ran = []
        scheduler.call_later(3, ran.append, "third")
        scheduler.call_later(1, ran.append, "first")
        scheduler.call_later(2, ran.append, "second")
        scheduler.advance(5)
        assert ran == ["first", "second", "third"]

    def test_same_due_time_runs_in_submission_order(self, scheduler):
        ran = []
        for name in ("a", "b", "c"):
            scheduler.call_later(1, ran.append, name)
        scheduler.advance(1)
        assert ran == ["a", "b", "c"]

    def test_call_soon_runs_on_next_run_pending(self, scheduler):
        ran = []
        scheduler.call_soon(ran.append, "now")
        assert ran == []
        scheduler.run_pending()
        assert ran == ["now"]

    def test_advance_runs_tasks_at_their_due_time(self, scheduler, clock):
        seen = []
        scheduler.call_later(1, lambda: seen.append(clock.monotonic()))
        scheduler.call_later(2.5, lambda: seen.append(clock.monotonic()))
        scheduler.advance(10)
        assert seen == [1.0, 2.5]
        assert clock.monotonic() == 10.0

    def test_task_scheduled_by_task_runs_in_same_advance(self, scheduler):
        ran = []
        scheduler.call_later(1, lambda: scheduler.call_later(1, ran.append, "nested"))
        scheduler.advance(2)
        assert ran == ["nested"]

    def test_pending_count(self, scheduler):
        assert scheduler.pending == 0
        scheduler.call_later(1, lambda: None)
        scheduler.call_later(2, lambda: None)
        assert scheduler.pending == 2
        scheduler.advance(1)
        assert scheduler.pending == 1

    def test_run_pending_returns_delay_to_next(self, scheduler):
        assert scheduler.run_pending() is None
        scheduler.call_later(3, lambda: None)
        assert scheduler.run_pending() == pytest.approx(3.0)


class TestPeriodic:
    def test_call_every_repeats(self, scheduler, clock):
        seen = []
        scheduler.call_every(1, lambda: seen.append(clock.monotonic()))
        scheduler.advance(3)
        assert seen == [1.0, 2.0, 3.0]

    def test_first_delay(self, scheduler, clock):
        seen = []
        scheduler.call_every(1, lambda: seen.append(clock.monotonic()), first_delay=0)
        scheduler.advance(2)
        assert seen == [0.0, 1.0, 2.0]

    def test_rejects_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)

    def test_cancel_stops_repeats(self, scheduler):
        seen = []
        task = scheduler.call_every(1, seen.append, "tick")
        scheduler.advance(2)
        task.cancel()
        task.cancel()
        scheduler.advance(5)
        assert seen == ["tick", "tick"]
        assert task.due is None
        assert scheduler.pending == 0

    def test_task_can_cancel_itself(self, scheduler):
        seen = []
        holder = {}

        def once_then_stop():
            seen.append(True)
            holder["task"].cancel()

        holder["task"] = scheduler.call_every(1, once_then_stop)
        scheduler.advance(5)
        assert seen == [True]

    def test_failing_task_keeps_repeating(self, scheduler, caplog):
        calls = []

        def flaky():
            calls.append(True)
            raise RuntimeError("boom")

        scheduler.call_every(1, flaky, name="flaky")
        scheduler.advance(3)
        assert len(calls) == 3
        assert "Scheduled task flaky failed" in caplog.text


class TestCancel:
    def test_cancelled_one_shot_never_runs(self, scheduler):
        ran = []
        task = scheduler.call_later(1, ran.append, "x")
        task.cancel()
        scheduler.advance(2)
        assert ran == []
        assert task.cancelled

    def test_due_reports_queue_time(self, scheduler):
        task = scheduler.call_later(4, lambda: None)
        assert task.due == pytest.approx(4.0)


class TestRunForever:
    def test_stop_from_task(self, logger):
        clock = VirtualClock(start=START)
        scheduler = Scheduler(logger, clock)
        seen = []

        def tick():
            seen.append(clock.monotonic())
            if len(seen) == 3:
                scheduler.stop()

        scheduler.call_every(1, tick)
        scheduler.run_forever(idle_sleep=0.5)

        assert seen == [1.0, 2.0, 3.0]
        assert not scheduler.running

    def test_default_clock_is_system_clock(self, logger):
        assert isinstance(Scheduler(logger).clock, SystemClock)
