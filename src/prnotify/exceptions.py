"""Custom exception hierarchy for prnotify."""

from __future__ import annotations


class NotifyError(Exception):
    """Base exception for all prnotify errors."""


class NotifyConfigError(NotifyError):
    """Invalid or missing configuration."""


class MalformedHashError(NotifyError):
    """Text that must be a 40 character hex commit hash is not one.

    This is a broken format contract, not missing optional data, so it is
    never absorbed into an "absent" value.
    """

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"not a 40 character hex commit hash: {value!r}")


class HistoryFormatError(NotifyError):
    """Stored notification history could not be decoded."""


class StorageError(NotifyError):
    """Reading or writing the history file failed."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
