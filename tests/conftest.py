"""Shared test fixtures."""

import pytest

from src.memos.cache import ReadCache
from src.memos.ids import IdAllocator
from src.memos.service import MemoService
from src.memos.store import MemoStore


@pytest.fixture
def store(tmp_path):
    """Create a MemoStore backed by a file in a temporary directory."""
    return MemoStore(tmp_path / "memos.json", backup=False)


@pytest.fixture
def service(store):
    """Create an opened MemoService with caching enabled."""
    s = MemoService(store, ReadCache(store, ttl_ms=60_000), IdAllocator())
    s.open()
    return s
