"""Memo data layer: store, id allocation, read cache and service."""

from src.memos.cache import ReadCache
from src.memos.errors import CorruptStore, MemoError, NotFound, StoreWriteFailed, ValidationFailed
from src.memos.ids import IdAllocator
from src.memos.models import Memo, MemoInput
from src.memos.service import MemoService
from src.memos.store import MemoStore

__all__ = [
    "CorruptStore",
    "IdAllocator",
    "Memo",
    "MemoError",
    "MemoInput",
    "MemoService",
    "MemoStore",
    "NotFound",
    "ReadCache",
    "StoreWriteFailed",
    "ValidationFailed",
]
