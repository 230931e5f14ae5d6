"""The three collections and the cross-collection exercise delete."""
from __future__ import annotations

import logging
from dataclasses import replace

from wingman.core.config import Settings
from wingman.domain.records import Exercise, JournalEntry, TrainingJourney

from .backing import KeyValueStore, MemoryStore
from .codec import CollectionCodec
from .collection import Collection
from .errors import StorageError, CascadeError
from .json_storage import JsonFileStore

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "@wingman_"


def create_store(settings: Settings) -> KeyValueStore:
    """Build the backing store selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "sql":
        from .sql_store import SQLKeyValueStore

        return SQLKeyValueStore()
    if settings.storage_backend == "memory":
        return MemoryStore()
    return JsonFileStore(settings.data_file)


class Storage:
    """Typed CRUD over exercises, journal entries and journeys sharing one store."""

    def __init__(self, store: KeyValueStore, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self.store = store
        self.exercises: Collection[Exercise] = Collection(
            store, f"{key_prefix}exercises", CollectionCodec(Exercise), "exercises"
        )
        self.journal: Collection[JournalEntry] = Collection(
            store, f"{key_prefix}journal", CollectionCodec(JournalEntry), "journal entries"
        )
        self.journeys: Collection[TrainingJourney] = Collection(
            store, f"{key_prefix}journeys", CollectionCodec(TrainingJourney), "journeys"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        return cls(create_store(settings), key_prefix=settings.key_prefix)

    async def delete_exercise(self, exercise_id: str) -> None:
        """
        Delete an exercise and scrub references to it.

        The exercise row goes first; if that fails (including NotFoundError)
        nothing else is touched. Journal entries pointing at the exercise are
        then dropped and the id is filtered out of every journey, keeping the
        order of the remaining ids (emptied journeys stay). Cleanup is not
        atomic across collections: both steps are attempted and a failure of
        either is raised as CascadeError after the exercise is already gone.
        """
        await self.exercises.remove(exercise_id)
        logger.info("Deleted exercise %s, cleaning up references", exercise_id)

        failed: list[str] = []
        try:
            await self._drop_journal_entries(exercise_id)
        except StorageError as exc:
            logger.error("Error removing journal entries for exercise %s: %s", exercise_id, exc)
            failed.append("journal")
        try:
            await self._strip_from_journeys(exercise_id)
        except StorageError as exc:
            logger.error("Error removing exercise %s from journeys: %s", exercise_id, exc)
            failed.append("journeys")
        if failed:
            raise CascadeError(exercise_id, failed)

    async def _drop_journal_entries(self, exercise_id: str) -> None:
        entries = await self.journal.read_strict()
        kept = [entry for entry in entries if entry.exercise_id != exercise_id]
        if len(kept) != len(entries):
            await self.journal.replace_all(kept)
            logger.debug("Dropped %d journal entries for %s", len(entries) - len(kept), exercise_id)

    async def _strip_from_journeys(self, exercise_id: str) -> None:
        journeys = await self.journeys.read_strict()
        if not any(exercise_id in journey.exercise_ids for journey in journeys):
            return
        cleaned = [
            replace(journey, exercise_ids=[eid for eid in journey.exercise_ids if eid != exercise_id])
            for journey in journeys
        ]
        await self.journeys.replace_all(cleaned)
