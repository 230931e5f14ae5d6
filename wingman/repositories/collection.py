"""Single-collection CRUD on top of a backing store."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, TypeVar

from .backing import KeyValueStore
from .codec import CollectionCodec
from .errors import BackingStoreError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Collection(Generic[R]):
    """
    One typed collection stored as a single text value under ``key``.

    ``list`` fails open: a backing-store read failure is logged and yields an
    empty list. Mutations fail closed: they read strictly, write once through
    ``replace_all`` and raise ``PersistenceError`` if the store rejects either
    call. There is no locking; two interleaved mutations on the same collection
    are last-writer-wins.
    """

    def __init__(self, store: KeyValueStore, key: str, codec: CollectionCodec[R], label: str) -> None:
        self._store = store
        self.key = key
        self.codec = codec
        self.label = label

    async def read_strict(self) -> list[R]:
        """Strict read used by mutations; a store failure is not an empty collection here."""
        try:
            text = await self._store.get(self.key)
        except BackingStoreError as exc:
            logger.error("Error loading %s: %s", self.label, exc)
            raise PersistenceError(f"Failed to load {self.label}") from exc
        return self.codec.decode(text)

    async def list(self) -> list[R]:
        try:
            text = await self._store.get(self.key)
        except BackingStoreError as exc:
            logger.error("Error loading %s: %s", self.label, exc)
            return []
        return self.codec.decode(text)

    async def get(self, record_id: str) -> R | None:
        for record in await self.list():
            if record.id == record_id:
                return record
        return None

    async def filter(self, predicate: Callable[[R], bool]) -> list[R]:
        return [record for record in await self.list() if predicate(record)]

    async def replace_all(self, records: Iterable[R]) -> None:
        text = self.codec.encode(records)
        try:
            await self._store.set(self.key, text)
        except BackingStoreError as exc:
            logger.error("Error saving %s: %s", self.label, exc)
            raise PersistenceError(f"Failed to save {self.label}") from exc

    async def add(self, record: R) -> None:
        records = await self.read_strict()
        records.append(record)
        await self.replace_all(records)

    async def update(self, record: R) -> bool:
        """Replace the first record sharing ``record.id``; unknown ids are a no-op.

        Returns whether anything was written.
        """
        records = await self.read_strict()
        for index, current in enumerate(records):
            if current.id == record.id:
                records[index] = record
                await self.replace_all(records)
                return True
        logger.debug("Skipping update of %s %s: not found", self.label, record.id)
        return False

    async def remove(self, record_id: str) -> None:
        records = await self.read_strict()
        kept = [record for record in records if record.id != record_id]
        if len(kept) == len(records):
            raise NotFoundError(f"{self.codec.kind} {record_id} not found")
        await self.replace_all(kept)
