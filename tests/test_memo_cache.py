"""Tests for ReadCache."""

from unittest.mock import MagicMock, patch

import pytest

from src.memos.cache import ReadCache


def _store(*results):
    store = MagicMock()
    store.load.side_effect = list(results)
    return store


def test_disabled_always_loads() -> None:
    store = _store(["a"], ["b"])
    cache = ReadCache(store, enabled=False)
    assert cache.get() == ["a"]
    assert cache.get() == ["b"]
    assert store.load.call_count == 2


def test_enabled_serves_snapshot_within_ttl() -> None:
    store = _store(["a"], ["b"])
    cache = ReadCache(store, ttl_ms=1000)
    with patch("src.memos.cache.time.monotonic", side_effect=[100.0, 100.5]):
        assert cache.get() == ["a"]
        assert cache.get() == ["a"]
    assert store.load.call_count == 1


def test_enabled_reloads_after_ttl() -> None:
    store = _store(["a"], ["b"])
    cache = ReadCache(store, ttl_ms=1000)
    with patch("src.memos.cache.time.monotonic", side_effect=[100.0, 101.0]):
        assert cache.get() == ["a"]
        assert cache.get() == ["b"]
    assert store.load.call_count == 2


def test_invalidate_forces_reload() -> None:
    store = _store(["a"], ["b"])
    cache = ReadCache(store, ttl_ms=60_000)
    assert cache.get() == ["a"]
    cache.invalidate()
    assert cache.get() == ["b"]


def test_zero_ttl_never_caches() -> None:
    store = _store(["a"], ["b"])
    cache = ReadCache(store, ttl_ms=0)
    assert cache.get() == ["a"]
    assert cache.get() == ["b"]


def test_returned_list_is_a_copy() -> None:
    store = _store(["a"])
    cache = ReadCache(store, ttl_ms=60_000)
    first = cache.get()
    first.append("mutated")
    assert cache.get() == ["a"]


def test_load_errors_propagate_and_do_not_cache() -> None:
    store = MagicMock()
    store.load.side_effect = [RuntimeError("boom"), ["a"]]
    cache = ReadCache(store, ttl_ms=60_000)
    with pytest.raises(RuntimeError):
        cache.get()
    assert cache.get() == ["a"]
