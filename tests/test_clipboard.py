from unittest.mock import patch

import pyperclip
import pytest

from copyholder.clipboard import MemoryClipboard, PyperclipClipboard
from copyholder.errors import AdapterWriteError


@pytest.fixture
def adapter(logger) -> PyperclipClipboard:
    return PyperclipClipboard(logger)


class TestPyperclipClipboard:
    def test_read_text(self, adapter):
        with patch("copyholder.clipboard.pyperclip.paste", return_value="copied"):
            assert adapter.read_text() == "copied"

    def test_empty_clipboard_reads_as_none(self, adapter):
        with patch("copyholder.clipboard.pyperclip.paste", return_value=""):
            assert adapter.read_text() is None

    def test_read_error_reads_as_none(self, adapter):
        error = pyperclip.PyperclipException("could not find a copy/paste mechanism")
        with patch("copyholder.clipboard.pyperclip.paste", side_effect=error):
            assert adapter.read_text() is None

    def test_os_error_reads_as_none(self, adapter):
        with patch("copyholder.clipboard.pyperclip.paste", side_effect=OSError("busy")):
            assert adapter.read_text() is None

    def test_undecodable_content_reads_as_none(self, adapter):
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        with patch("copyholder.clipboard.pyperclip.paste", side_effect=error):
            assert adapter.read_text() is None

    def test_write_text(self, adapter):
        with patch("copyholder.clipboard.pyperclip.copy") as copy:
            adapter.write_text("hello")
        copy.assert_called_once_with("hello")

    def test_write_error_raises(self, adapter):
        error = pyperclip.PyperclipException("no clipboard")
        with patch("copyholder.clipboard.pyperclip.copy", side_effect=error):
            with pytest.raises(AdapterWriteError):
                adapter.write_text("hello")


class TestMemoryClipboard:
    def test_round_trip(self):
        clipboard = MemoryClipboard()
        assert clipboard.read_text() is None
        clipboard.write_text("x")
        assert clipboard.read_text() == "x"
        assert clipboard.writes == ["x"]

    def test_initial_value(self):
        assert MemoryClipboard("start").read_text() == "start"
