"""Exceptions raised for precondition failures.

Runtime OS failures (a file vanishing between check and use, permission
denied on stat) are not raised; entries translate them into ``False`` or
``None`` and keep the underlying ``OSError`` on ``last_error``.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "DirectoryNotFoundError",
    "DirectoryNotWritableError",
    "FileControlError",
    "NotReadableError",
    "NotWritableError",
]


class FileControlError(Exception):
    """Base error for filecontrol precondition failures."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class DirectoryNotFoundError(FileControlError):
    """A path given as a directory is not an existing directory."""

    def __init__(self, path: str | Path, operation: str) -> None:
        super().__init__(
            f'Directory "{path}" passed to {operation}() is not an existing directory',
            path,
        )
        self.operation = operation


class DirectoryNotWritableError(FileControlError):
    """A target directory exists but cannot be written to."""

    def __init__(self, path: str | Path, operation: str) -> None:
        super().__init__(f'Directory "{path}" passed to {operation}() is not writable', path)
        self.operation = operation


class NotReadableError(FileControlError):
    """A file exists but lacks read permission."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(f'File "{path}" is not readable', path)


class NotWritableError(FileControlError):
    """A file exists but lacks write permission."""

    def __init__(self, path: str | Path, operation: str | None = None) -> None:
        where = f" passed to {operation}()" if operation else ""
        super().__init__(f'File "{path}"{where} is not writable', path)
        self.operation = operation
