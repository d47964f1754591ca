"""MemoService — list, create, update and delete memos.

Composes the store, read cache and id allocator. Reads go through the
cache; writes always reload the file, mutate, save and then invalidate the
cache. Writes are serialized through a single ``asyncio.Lock`` so two
interleaved requests cannot overwrite each other's change.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from src.memos.cache import ReadCache
from src.memos.errors import NotFound
from src.memos.ids import IdAllocator
from src.memos.models import Memo, MemoInput, now_iso, parse_timestamp
from src.memos.store import MemoStore

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)


class MemoService:
    """Owns the cache and allocator state for one memo file.

    Build one per process (``MemoService.from_settings``) and call
    ``open()`` before serving requests.
    """

    def __init__(self, store: MemoStore, cache: ReadCache, allocator: IdAllocator) -> None:
        self._store = store
        self._cache = cache
        self._ids = allocator
        self._write_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, config: Settings) -> MemoService:
        store = MemoStore(config.data_file, backup=config.backup_enabled)
        cache = ReadCache(store, enabled=config.cache_enabled, ttl_ms=config.cache_ttl_ms)
        return cls(store, cache, IdAllocator(reclaim_top=config.reclaim_top_id))

    def open(self) -> None:
        """Seed the id allocator from the stored memos.

        Raises ``CorruptStore`` if the file cannot be read.
        """
        memos = self._store.load()
        self._ids.seed(memos)
        logger.info(
            "Memo store opened: %s (%d memos, next id %d)",
            self._store.path,
            len(memos),
            self._ids.last + 1,
        )

    # -- Read ------------------------------------------------------------------

    async def list(self) -> list[Memo]:
        return self._cache.get()

    async def get(self, memo_id: int) -> Memo:
        for memo in self._cache.get():
            if memo.id == memo_id:
                return memo
        raise NotFound(memo_id)

    # -- Write -----------------------------------------------------------------

    async def create(self, title: str, content: str) -> Memo:
        """Store a new memo and return it."""
        data = MemoInput.parse(title, content)
        async with self._write_lock:
            memos = self._store.load()
            now = now_iso()
            memo = Memo(
                id=self._ids.next(),
                title=data.title,
                content=data.content,
                created_at=now,
                updated_at=now,
            )
            memos.append(memo)
            self._store.save(memos)
            self._cache.invalidate()
        logger.info("Created memo %d", memo.id)
        return memo

    async def update(self, memo_id: int, title: str, content: str) -> Memo:
        """Replace a memo's title and content. Raises ``NotFound``."""
        data = MemoInput.parse(title, content)
        async with self._write_lock:
            memos = self._store.load()
            memo = _find(memos, memo_id)
            memo.title = data.title
            memo.content = data.content
            now = now_iso()
            # updatedAt never moves backwards
            if parse_timestamp(memo.updated_at) <= parse_timestamp(now):
                memo.updated_at = now
            self._store.save(memos)
            self._cache.invalidate()
        logger.info("Updated memo %d", memo_id)
        return memo

    async def delete(self, memo_id: int) -> Memo:
        """Remove a memo permanently and return it. Raises ``NotFound``."""
        async with self._write_lock:
            memos = self._store.load()
            memo = _find(memos, memo_id)
            memos.remove(memo)
            self._store.save(memos)
            self._cache.invalidate()
            self._ids.release(memo_id)
        logger.info("Deleted memo %d", memo_id)
        return memo


def _find(memos: list[Memo], memo_id: int) -> Memo:
    for memo in memos:
        if memo.id == memo_id:
            return memo
    raise NotFound(memo_id)
