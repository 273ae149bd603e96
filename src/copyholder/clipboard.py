# region Docstring
"""
copyholder.clipboard
Narrow read/write interface to the operating system text clipboard.
Contents:
- ClipboardAdapter:
    Abstract contract consumed by the history engine.
    - read_text() -> Optional[str]: current text, or None when the clipboard is
        empty, holds no text, or cannot be read. Never raises.
    - write_text(content): replace the clipboard text. Raises AdapterWriteError.
- PyperclipClipboard:
    Default adapter backed by pyperclip.
- MemoryClipboard:
    In-process clipboard for headless runs and tests.
"""
# endregion
# region Imports
from abc import ABC, abstractmethod
from logging import Logger as T_Logger
from typing import Optional

import pyperclip

from copyholder.errors import AdapterReadError, AdapterWriteError

# endregion
# region Adapter Contract


class ClipboardAdapter(ABC):
    """Contract for clipboard access."""

    @abstractmethod
    def read_text(self) -> Optional[str]:
        """Current clipboard text, or None if there is none or it cannot be read."""
        ...

    @abstractmethod
    def write_text(self, content: str) -> None:
        """Replace the clipboard text.

        Raises:
            AdapterWriteError: If the clipboard could not be written.
        """
        ...


# endregion
# region Implementations


class PyperclipClipboard(ClipboardAdapter):
    """Clipboard adapter backed by pyperclip."""

    def __init__(self, logger: T_Logger) -> None:
        self.__logger = logger.getChild(self.__class__.__name__)

    def read_text(self) -> Optional[str]:
        try:
            return self._paste() or None
        except AdapterReadError as e:
            self.__logger.debug("Clipboard unreadable, treating as empty. %s", str(e))
            return None

    def _paste(self) -> str:
        try:
            return pyperclip.paste()
        except (pyperclip.PyperclipException, OSError, UnicodeError) as e:
            raise AdapterReadError(f"Failed to read clipboard: {str(e)}") from e

    def write_text(self, content: str) -> None:
        try:
            pyperclip.copy(content)
        except (pyperclip.PyperclipException, OSError) as e:
            raise AdapterWriteError(f"Failed to write clipboard: {str(e)}") from e


class MemoryClipboard(ClipboardAdapter):
    """In-process clipboard. Useful without a desktop session and in tests."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self.content: Optional[str] = initial
        self.writes: list[str] = []

    def read_text(self) -> Optional[str]:
        return self.content or None

    def write_text(self, content: str) -> None:
        self.content = content
        self.writes.append(content)


# endregion

__all__ = ["ClipboardAdapter", "MemoryClipboard", "PyperclipClipboard"]
