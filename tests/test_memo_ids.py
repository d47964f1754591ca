"""Tests for IdAllocator."""

from src.memos.ids import IdAllocator
from src.memos.models import Memo

TS = "2025-01-31T09:15:00.123Z"


def _memo(memo_id: int) -> Memo:
    return Memo(id=memo_id, title="t", content="c", created_at=TS, updated_at=TS)


def test_empty_collection_starts_at_one() -> None:
    ids = IdAllocator.from_memos([])
    assert ids.last == 0
    assert ids.next() == 1
    assert ids.next() == 2


def test_seeded_from_maximum_not_count() -> None:
    ids = IdAllocator.from_memos([_memo(3), _memo(10), _memo(7)])
    assert ids.last == 10
    assert ids.next() == 11


def test_seed_resets_mark() -> None:
    ids = IdAllocator(last=50)
    ids.seed([_memo(2)])
    assert ids.next() == 3


def test_release_of_top_id_is_reused() -> None:
    ids = IdAllocator()
    assert ids.next() == 1
    assert ids.next() == 2
    ids.release(2)
    assert ids.next() == 2


def test_release_of_lower_id_is_not_reused() -> None:
    ids = IdAllocator()
    ids.next()
    ids.next()
    ids.release(1)
    assert ids.next() == 3


def test_release_only_steps_back_once() -> None:
    ids = IdAllocator(last=3)
    ids.release(3)
    ids.release(3)
    assert ids.last == 2
    ids.release(2)
    assert ids.next() == 2


def test_monotonic_when_reclaim_disabled() -> None:
    ids = IdAllocator(reclaim_top=False)
    ids.next()
    ids.next()
    ids.release(2)
    assert ids.next() == 3
