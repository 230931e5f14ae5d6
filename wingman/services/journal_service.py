"""Journal use cases: writing reflections and grouping them for display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from wingman.domain.records import Exercise, InvalidRecordError, JournalEntry, utcnow
from wingman.repositories.storage import Storage

from .catalog_service import new_record_id

UNKNOWN_EXERCISE = "Unknown Exercise"
UNKNOWN_CATEGORY = "Unknown Category"


@dataclass(frozen=True)
class EntryView:
    entry: JournalEntry
    exercise_title: str
    exercise_category: str


def describe(entry: JournalEntry, exercises: Mapping[str, Exercise]) -> EntryView:
    exercise = exercises.get(entry.exercise_id)
    if exercise is None:
        return EntryView(entry, UNKNOWN_EXERCISE, UNKNOWN_CATEGORY)
    return EntryView(entry, exercise.title, exercise.category)


class JournalService:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def create_entry(self, exercise_id: str, completion_date: date, comment: str, mood: int) -> JournalEntry:
        """Build and append a new entry; the exercise reference is not checked."""
        text = (comment or "").strip()
        if not text:
            raise InvalidRecordError("Please add your thoughts about the exercise")
        if not exercise_id:
            raise InvalidRecordError("Please select an exercise")
        entry = JournalEntry(
            id=new_record_id(),
            exercise_id=exercise_id,
            completion_date=completion_date,
            comment=text,
            mood=mood,
            created_at=utcnow(),
        )
        await self.storage.journal.add(entry)
        return entry

    async def delete_entry(self, entry_id: str) -> None:
        await self.storage.journal.remove(entry_id)

    async def entries_newest_first(self) -> list[JournalEntry]:
        entries = await self.storage.journal.list()
        return sorted(entries, key=lambda e: e.completion_date, reverse=True)

    async def entries_on(self, day: date) -> list[JournalEntry]:
        return [e for e in await self.entries_newest_first() if e.completion_date == day]

    async def entries_for_exercise(self, exercise_id: str) -> list[JournalEntry]:
        return await self.storage.journal.filter(lambda e: e.exercise_id == exercise_id)

    async def days_with_entries(self) -> dict[date, list[JournalEntry]]:
        grouped: dict[date, list[JournalEntry]] = {}
        for entry in await self.entries_newest_first():
            grouped.setdefault(entry.completion_date, []).append(entry)
        return grouped

    async def timeline(self, day: date | None = None) -> list[EntryView]:
        """Entries (optionally for one day) with their exercise title/category resolved."""
        entries = await (self.entries_on(day) if day else self.entries_newest_first())
        exercises = {exercise.id: exercise for exercise in await self.storage.exercises.list()}
        return [describe(entry, exercises) for entry in entries]
