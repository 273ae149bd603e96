# region Docstring
"""
copyholder.errors
Exception hierarchy shared by the store, the clipboard adapters, and the engine.
Contents:
- CopyHolderError: Base class for every error raised by this package.
- PersistenceError: The history database could not be read or written.
- ClipboardAdapterError: Base class for OS clipboard failures.
    - AdapterReadError: The clipboard could not be read.
    - AdapterWriteError: The clipboard could not be written.
"""
# endregion


class CopyHolderError(Exception):
    """Base exception for copyholder errors."""

    pass


class PersistenceError(CopyHolderError):
    """Custom exception for history store errors."""

    pass


class ClipboardAdapterError(CopyHolderError):
    """Custom exception for clipboard adapter errors."""

    pass


class AdapterReadError(ClipboardAdapterError):
    """Raised when the clipboard cannot be read."""

    pass


class AdapterWriteError(ClipboardAdapterError):
    """Raised when the clipboard cannot be written."""

    pass


__all__ = [
    "AdapterReadError",
    "AdapterWriteError",
    "ClipboardAdapterError",
    "CopyHolderError",
    "PersistenceError",
]
