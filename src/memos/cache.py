"""ReadCache — short-lived snapshot of the memo collection."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.memos.models import Memo
    from src.memos.store import MemoStore


class ReadCache:
    """Serves repeated reads from memory for up to *ttl_ms* milliseconds.

    When disabled every ``get()`` goes straight to the store. Call
    ``invalidate()`` after each successful save.
    """

    def __init__(self, store: MemoStore, *, enabled: bool = True, ttl_ms: int = 5000) -> None:
        self._store = store
        self._enabled = enabled
        self._ttl = ttl_ms / 1000
        self._snapshot: list[Memo] | None = None
        self._loaded_at: float | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self) -> list[Memo]:
        """Return the collection, reloading it once the snapshot is stale."""
        if not self._enabled:
            return self._store.load()

        now = time.monotonic()
        if self._snapshot is None or self._loaded_at is None or now - self._loaded_at >= self._ttl:
            self._snapshot = self._store.load()
            self._loaded_at = now
        return list(self._snapshot)

    def invalidate(self) -> None:
        self._snapshot = None
        self._loaded_at = None
