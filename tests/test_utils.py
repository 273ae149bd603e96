from datetime import datetime, timedelta, timezone

from copyholder.utils import ensure_utc, get_time, preview


def test_get_time_is_utc():
    assert get_time().tzinfo == timezone.utc


def test_ensure_utc_naive():
    assert ensure_utc(datetime(2025, 1, 1, 8)) == datetime(2025, 1, 1, 8, tzinfo=timezone.utc)


def test_ensure_utc_converts_offset():
    value = datetime(2025, 1, 1, 10, tzinfo=timezone(timedelta(hours=2)))
    converted = ensure_utc(value)
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 8


def test_preview_short_text_unchanged():
    assert preview("hello") == "hello"


def test_preview_truncates_long_line():
    assert preview("abcdef", width=4) == "abc…"
    assert len(preview("x" * 200, width=80)) == 80


def test_preview_marks_multiline():
    assert preview("first line\nsecond line") == "first line…"


def test_preview_empty():
    assert preview("") == ""
