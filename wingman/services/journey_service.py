"""Journey (exercise playlist) use cases."""

from __future__ import annotations

from dataclasses import dataclass

from wingman.domain.records import Exercise, InvalidRecordError, TrainingJourney, utcnow
from wingman.repositories.storage import Storage

from .catalog_service import new_record_id
from .journal_service import UNKNOWN_EXERCISE


@dataclass(frozen=True)
class PlaylistItem:
    position: int
    exercise_id: str
    title: str
    exercise: Exercise | None


class JourneyService:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def journeys_newest_first(self) -> list[TrainingJourney]:
        journeys = await self.storage.journeys.list()
        return sorted(journeys, key=lambda j: j.created_at, reverse=True)

    async def resolve(self, journey: TrainingJourney) -> list[PlaylistItem]:
        """Playlist in stored order; ids with no matching exercise show as unknown."""
        exercises = {exercise.id: exercise for exercise in await self.storage.exercises.list()}
        items = []
        for position, exercise_id in enumerate(journey.exercise_ids):
            exercise = exercises.get(exercise_id)
            title = exercise.title if exercise else UNKNOWN_EXERCISE
            items.append(PlaylistItem(position, exercise_id, title, exercise))
        return items

    async def save_journey(self, name: str, exercise_ids: list[str], journey_id: str | None = None) -> TrainingJourney:
        """Create a journey, or replace the named one keeping its creation time."""
        clean_name = (name or "").strip()
        if not clean_name:
            raise InvalidRecordError("Please enter a journey name")
        if journey_id:
            current = await self.storage.journeys.get(journey_id)
            if current is not None:
                journey = TrainingJourney(journey_id, clean_name, list(exercise_ids), current.created_at)
                await self.storage.journeys.update(journey)
                return journey
        journey = TrainingJourney(journey_id or new_record_id(), clean_name, list(exercise_ids), utcnow())
        await self.storage.journeys.add(journey)
        return journey

    async def delete_journey(self, journey_id: str) -> None:
        await self.storage.journeys.remove(journey_id)
