"""Errors raised by the memo data layer.

Each error carries the HTTP status the web layer answers with, so handlers
never need to know which component failed.
"""

from __future__ import annotations


class MemoError(Exception):
    """Base class for memo failures surfaced to API clients."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(MemoError):
    """Input has the wrong shape, length or characters."""

    status = 400


class NotFound(MemoError):
    """No memo with the requested id."""

    status = 404

    def __init__(self, memo_id: int) -> None:
        super().__init__("メモが見つかりません")
        self.memo_id = memo_id


class CorruptStore(MemoError):
    """The data file exists but is not a readable memo collection."""


class StoreWriteFailed(MemoError):
    """The data file could not be written."""
