"""High-water-mark id allocation for new memos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from src.memos.models import Memo

logger = logging.getLogger(__name__)


class IdAllocator:
    """Hands out increasing integer ids, starting after the largest stored one.

    Nothing is persisted: the mark is derived from the store when the
    service opens. With *reclaim_top* set, releasing the current highest id
    lowers the mark by one so that exact id is handed out again next.
    """

    def __init__(self, last: int = 0, *, reclaim_top: bool = True) -> None:
        self._last = last
        self._reclaim_top = reclaim_top

    @classmethod
    def from_memos(cls, memos: Iterable[Memo], *, reclaim_top: bool = True) -> IdAllocator:
        allocator = cls(reclaim_top=reclaim_top)
        allocator.seed(memos)
        return allocator

    @property
    def last(self) -> int:
        """The largest id handed out or seen so far."""
        return self._last

    def seed(self, memos: Iterable[Memo]) -> None:
        """Reset the mark to the largest id in *memos* (0 when empty)."""
        self._last = max((m.id for m in memos), default=0)
        logger.debug("Id allocator seeded at %d", self._last)

    def next(self) -> int:
        self._last += 1
        return self._last

    def release(self, memo_id: int) -> None:
        """Note that *memo_id* was deleted."""
        if self._reclaim_top and memo_id == self._last:
            self._last -= 1
