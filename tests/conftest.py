from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Garante que o pacote wingman seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wingman.domain.records import Exercise, JournalEntry, TrainingJourney  # noqa: E402
from wingman.repositories.backing import MemoryStore  # noqa: E402
from wingman.repositories.storage import Storage  # noqa: E402

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def make_exercise(exercise_id: str = "e1", **overrides) -> Exercise:
    values = dict(
        id=exercise_id,
        title=f"Exercise {exercise_id}",
        short_description="short",
        description="long description",
        category="social-practice",
        difficulty="beginner",
        tags=["eye-contact"],
    )
    values.update(overrides)
    return Exercise(**values)


def make_entry(entry_id: str = "j1", exercise_id: str = "e1", **overrides) -> JournalEntry:
    values = dict(
        id=entry_id,
        exercise_id=exercise_id,
        completion_date=date(2024, 3, 1),
        comment="went fine",
        mood=4,
        created_at=CREATED,
    )
    values.update(overrides)
    return JournalEntry(**values)


def make_journey(journey_id: str = "t1", exercise_ids=None, **overrides) -> TrainingJourney:
    values = dict(
        id=journey_id,
        name=f"Journey {journey_id}",
        exercise_ids=list(exercise_ids if exercise_ids is not None else ["e1"]),
        created_at=CREATED,
    )
    values.update(overrides)
    return TrainingJourney(**values)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def storage(store) -> Storage:
    return Storage(store)
