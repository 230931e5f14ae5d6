"""Key/value backing store on a single SQLAlchemy table."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from wingman.db.models import KeyValueEntry
from wingman.db.session import session_scope

from .errors import BackingStoreError


class SQLKeyValueStore:
    """Stores each key as a row of ``kv_entries``; blocking calls run in a worker thread."""

    def _get(self, key: str) -> str | None:
        try:
            with session_scope() as session:
                stmt = select(KeyValueEntry.value).where(KeyValueEntry.key == key)
                return session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise BackingStoreError(f"read failed for {key}: {exc}") from exc

    def _set(self, key: str, value: str) -> None:
        try:
            with session_scope() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                    entry.updated_at = datetime.now(timezone.utc)
        except SQLAlchemyError as exc:
            raise BackingStoreError(f"write failed for {key}: {exc}") from exc

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)
