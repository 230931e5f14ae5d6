"""Exercise catalog use cases (seeding, search, save/delete)."""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path
from typing import Iterable

from wingman.domain.records import Exercise, TrainingJourney
from wingman.repositories.storage import Storage

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def new_record_id() -> str:
    return secrets.token_urlsafe(9)


def _load_seed(filename: str, section: str) -> list:
    path = DATA_DIR / filename
    with path.open("r", encoding="utf-8") as f:
        return json.load(f).get(section, [])


class CatalogService:
    """Lookups and mutations for the exercise catalog."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def seed_if_empty(self) -> dict[str, int]:
        """Write the bundled starter exercises/journeys into collections that are still empty."""
        seeded = {"exercises": 0, "journeys": 0}
        if not await self.storage.exercises.read_strict():
            exercises = [Exercise.from_payload(p) for p in _load_seed("initial_exercises.json", "exercises")]
            await self.storage.exercises.replace_all(exercises)
            seeded["exercises"] = len(exercises)
        if not await self.storage.journeys.read_strict():
            journeys = [TrainingJourney.from_payload(p) for p in _load_seed("initial_journeys.json", "journeys")]
            await self.storage.journeys.replace_all(journeys)
            seeded["journeys"] = len(journeys)
        if any(seeded.values()):
            logger.info("Seeded starter data: %s", seeded)
        return seeded

    async def search(self, query: str = "", tags: Iterable[str] = ()) -> list[Exercise]:
        """Title/short-description substring match AND any of ``tags`` (when given)."""
        needle = (query or "").strip().lower()
        wanted = set(tags or ())

        def matches(exercise: Exercise) -> bool:
            if needle and needle not in exercise.title.lower() and needle not in exercise.short_description.lower():
                return False
            return not wanted or any(tag in wanted for tag in exercise.tags)

        return await self.storage.exercises.filter(matches)

    async def all_tags(self) -> list[str]:
        tags = {tag for exercise in await self.storage.exercises.list() for tag in exercise.tags}
        return sorted(tags)

    async def save_exercise(self, exercise: Exercise) -> Exercise:
        """Update in place when the id exists, otherwise append."""
        if not await self.storage.exercises.update(exercise):
            await self.storage.exercises.add(exercise)
        return exercise

    async def delete_exercise(self, exercise_id: str) -> None:
        await self.storage.delete_exercise(exercise_id)
