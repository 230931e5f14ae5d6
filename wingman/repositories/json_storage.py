"""
JSON-file backing store.

All keys live in one JSON document (``{key: text}``). Every ``set`` reads the
document, replaces one key and swaps a fully written temp file in over the old
one, so readers and a crash mid-write only ever see a complete document.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import threading
from pathlib import Path

from .errors import BackingStoreError

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """One lock per data file, shared by every store instance pointing at it."""
    key = path.resolve()
    with _locks_guard:
        return _locks.setdefault(key, threading.Lock())


class JsonFileStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BackingStoreError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise BackingStoreError(f"{self.path} does not hold a key/value object")
        return data

    def _save(self, db: dict) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(db, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise BackingStoreError(f"cannot write {self.path}: {exc}") from exc

    def _get(self, key: str) -> str | None:
        with self._lock:
            value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise BackingStoreError(f"value under {key} is not text")
        return value

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            db = self._load()
            db[key] = value
            self._save(db)

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)
