"""
Tests for ConsoleControls: typed row and id commands driving selection and
manual copy through the scheduler.
"""

import io
from datetime import timedelta

import pytest

from copyholder.controls import HELP, ConsoleControls
from copyholder.engine import COPY_CONFIRMATION

from .conftest import START


@pytest.fixture
def controls(binding, scheduler, logger) -> ConsoleControls:
    return ConsoleControls(binding, scheduler, logger, stream=io.StringIO(""))


@pytest.fixture
def two_entries(store):
    older = store.insert("older", START - timedelta(minutes=1))
    newest = store.insert("newest", START)
    return older, newest


class TestSelection:
    def test_row_number_selects(self, controls, binding, two_entries):
        older, _ = two_entries
        assert controls.handle("2")
        assert binding.selected_entry_id == older
        assert binding.detail_entry.content == "older"

    def test_id_prefix_selects(self, controls, binding, two_entries):
        older, _ = two_entries
        assert controls.handle(older[:6] + "\n")
        assert binding.selected_entry_id == older

    def test_dash_follows_newest(self, controls, binding, two_entries):
        controls.handle("2")
        assert controls.handle("-")
        assert binding.selected_entry_id is None
        assert binding.detail_entry.content == "newest"

    def test_unknown_reference_reports_status(self, controls, binding, two_entries):
        assert not controls.handle("9")
        assert controls.status == "No entry matches 9"
        assert binding.selected_entry_id is None

    def test_unknown_command(self, controls, two_entries):
        assert not controls.handle("c 1 2")
        assert controls.status.startswith("Unknown command")
        controls.handle("1")
        assert controls.status == HELP


class TestCopy:
    def test_copy_runs_on_scheduler(self, controls, binding, clipboard, scheduler, store, two_entries):
        clipboard.content = "something else"
        assert controls.handle("c 2")
        assert clipboard.content == "something else"

        scheduler.run_pending()

        assert clipboard.content == "older"
        assert binding.toast_message == COPY_CONFIRMATION
        assert store.count() == 2

    def test_copy_then_tick_creates_no_entry(
        self, controls, history_engine, clipboard, scheduler, store, two_entries
    ):
        history_engine.start()
        controls.handle("copy 2")
        scheduler.advance(5)
        assert clipboard.content == "older"
        assert store.count() == 2


class TestInput:
    def test_read_lines_then_drain(self, binding, scheduler, logger, clipboard, two_entries):
        older, _ = two_entries
        controls = ConsoleControls(binding, scheduler, logger, stream=io.StringIO("2\nc 2\n"))
        controls.read_lines()
        controls.drain()
        assert binding.selected_entry_id == older
        scheduler.run_pending()
        assert clipboard.content == "older"

    def test_fed_lines_run_on_drain_interval(self, controls, binding, scheduler, two_entries):
        older, _ = two_entries
        controls.start()
        controls.feed("2")
        assert binding.selected_entry_id is None
        scheduler.advance(0.1)
        assert binding.selected_entry_id == older
        controls.stop()

    def test_stop_cancels_drain(self, controls, binding, scheduler, two_entries):
        controls.start()
        controls.stop()
        controls.feed("2")
        scheduler.advance(1)
        assert binding.selected_entry_id is None
