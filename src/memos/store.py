"""MemoStore — the JSON file that holds every memo."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from src.config import settings
from src.memos.errors import CorruptStore, StoreWriteFailed
from src.memos.models import Memo

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_collection = TypeAdapter(list[Memo])


class MemoStore:
    """Reads and writes the memo collection as one JSON array.

    Pass an explicit *path* for test isolation (e.g. ``tmp_path / "memos.json"``).

    All methods are synchronous. The file handle is opened and closed on
    every call.
    """

    def __init__(self, path: Path | None = None, *, backup: bool | None = None) -> None:
        self._path = path or settings.data_file
        self._backup = settings.backup_enabled if backup is None else backup

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return self._path.with_name(self._path.name + ".backup")

    # -- Read ------------------------------------------------------------------

    def load(self) -> list[Memo]:
        """Return every stored memo in insertion order.

        A missing file is an empty collection. Anything else that is not a
        JSON array of memos raises ``CorruptStore``.
        """
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            msg = f"Cannot read {self._path}: {exc}"
            raise CorruptStore(msg) from exc

        try:
            memos = _collection.validate_json(raw)
        except ValidationError as exc:
            msg = f"{self._path} is not a memo collection: {exc.error_count()} error(s)"
            raise CorruptStore(msg) from exc

        seen: set[int] = set()
        for memo in memos:
            if memo.id in seen:
                msg = f"{self._path} has duplicate memo id {memo.id}"
                raise CorruptStore(msg)
            seen.add(memo.id)
        return memos

    # -- Write -----------------------------------------------------------------

    def save(self, memos: list[Memo]) -> None:
        """Atomically replace the file with *memos*."""
        data = json.dumps([m.to_json() for m in memos], ensure_ascii=False, indent=2)

        if self._backup:
            self._write_backup()

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            msg = f"Cannot write {self._path}: {exc}"
            raise StoreWriteFailed(msg) from exc
        finally:
            if tmp_name is not None:
                _remove_quietly(tmp_name)

        logger.debug("Saved %d memos to %s", len(memos), self._path)

    def _write_backup(self) -> None:
        if not self._path.exists():
            return
        try:
            shutil.copy2(self._path, self.backup_path)
        except OSError:
            logger.warning("Backup of %s failed, saving anyway", self._path, exc_info=True)


def _remove_quietly(name: str) -> None:
    try:
        os.unlink(name)
    except OSError:
        logger.warning("Could not remove temporary file %s", name)
