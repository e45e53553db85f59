"""Exception hierarchy for Blogger backup decoding.

All fatal conditions abort the decode with one of these exceptions; there is no
partial result. Orphaned comments are not errors and never raise.
"""

from typing import Iterable, Optional


class BackupError(Exception):
    """Base exception for every fatal decode failure."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class BackupReadError(BackupError):
    """The backup source could not be opened or read."""


class BackupEncodingError(BackupError):
    """A byte sequence could not be decoded into valid text."""


class BackupStructureError(BackupError):
    """The markup is unbalanced or otherwise not well-formed."""


class TimestampParseError(BackupError):
    """A published timestamp is not an offset-aware ISO 8601 date-time."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Unparsable published timestamp: {text!r}")
        self.text = text


class EntryConversionError(BackupError):
    """An entry classified as post or comment lacks a mandatory field."""

    def __init__(self, kind: str, missing: Iterable[str], entry_id: Optional[str] = None):
        self.kind = kind
        self.missing = sorted(missing)
        self.entry_id = entry_id
        super().__init__(
            f"Entry {entry_id!r} classified as {kind} is missing "
            f"mandatory fields: {', '.join(self.missing)}"
        )
