"""Backing-store interface and the in-memory implementation."""
from __future__ import annotations

from typing import Iterable, Protocol

from .errors import BackingStoreError


class KeyValueStore(Protocol):
    """
    Minimal async contract the persistence layer depends on.

    ``get`` returns the stored text or None when the key was never written.
    ``set`` either stores the text or raises ``BackingStoreError``.
    """

    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store with switchable failures, used by tests and the memory backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.fail_write_keys: set[str] = set()
        self.writes: list[str] = []

    def fail_writes_for(self, keys: Iterable[str]) -> None:
        self.fail_write_keys.update(keys)

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise BackingStoreError(f"read failed for {key}")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes or key in self.fail_write_keys:
            raise BackingStoreError(f"write failed for {key}")
        self.data[key] = value
        self.writes.append(key)
