"""
Catalog, journal and journey use cases.
"""
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from wingman.domain.records import InvalidRecordError
from wingman.services.catalog_service import CatalogService
from wingman.services.journal_service import UNKNOWN_CATEGORY, UNKNOWN_EXERCISE, JournalService
from wingman.services.journey_service import JourneyService

from conftest import make_entry, make_exercise, make_journey


@pytest.mark.asyncio
async def test_seed_only_fills_empty_collections(storage):
    await storage.journeys.add(make_journey("mine", []))
    seeded = await CatalogService(storage).seed_if_empty()

    assert seeded["exercises"] > 0
    assert seeded["journeys"] == 0
    assert [j.id for j in await storage.journeys.list()] == ["mine"]

    again = await CatalogService(storage).seed_if_empty()
    assert again == {"exercises": 0, "journeys": 0}


@pytest.mark.asyncio
async def test_search_by_text_and_tags(storage):
    await storage.exercises.add(make_exercise("e1", title="Hold Eye Contact", tags=["eye-contact"]))
    await storage.exercises.add(make_exercise("e2", title="Small talk", short_description="Ask about weekend", tags=["conversation"]))
    await storage.exercises.add(make_exercise("e3", title="Posture", tags=["body", "eye-contact"]))
    svc = CatalogService(storage)

    assert [e.id for e in await svc.search("eye")] == ["e1"]
    assert [e.id for e in await svc.search("WEEKEND")] == ["e2"]
    assert [e.id for e in await svc.search(tags=["eye-contact"])] == ["e1", "e3"]
    assert [e.id for e in await svc.search("post", ["eye-contact"])] == ["e3"]
    assert await svc.all_tags() == ["body", "conversation", "eye-contact"]


@pytest.mark.asyncio
async def test_save_exercise_adds_then_updates(storage):
    svc = CatalogService(storage)
    await svc.save_exercise(make_exercise("e1"))
    await svc.save_exercise(make_exercise("e1", title="Edited"))
    records = await storage.exercises.list()
    assert len(records) == 1
    assert records[0].title == "Edited"


@pytest.mark.asyncio
async def test_journal_timeline_sorts_and_marks_unknown(storage):
    await storage.exercises.add(make_exercise("e1", title="Known", category="self-practice"))
    await storage.journal.add(make_entry("old", completion_date=date(2024, 1, 1)))
    await storage.journal.add(make_entry("new", exercise_id="ghost", completion_date=date(2024, 2, 1)))
    svc = JournalService(storage)

    views = await svc.timeline()
    assert [v.entry.id for v in views] == ["new", "old"]
    assert (views[0].exercise_title, views[0].exercise_category) == (UNKNOWN_EXERCISE, UNKNOWN_CATEGORY)
    assert (views[1].exercise_title, views[1].exercise_category) == ("Known", "self-practice")
    # sorting is presentation-only
    assert [e.id for e in await storage.journal.list()] == ["old", "new"]

    assert [v.entry.id for v in await svc.timeline(date(2024, 1, 1))] == ["old"]
    assert set(await svc.days_with_entries()) == {date(2024, 1, 1), date(2024, 2, 1)}


@pytest.mark.asyncio
async def test_create_entry_requires_comment(storage):
    svc = JournalService(storage)
    with pytest.raises(InvalidRecordError):
        await svc.create_entry("e1", date(2024, 1, 1), "   ", 3)
    entry = await svc.create_entry("never-existed", date(2024, 1, 1), "  fine  ", 3)
    assert entry.comment == "fine"
    assert [e.id for e in await storage.journal.list()] == [entry.id]


@pytest.mark.asyncio
async def test_journey_resolve_and_save(storage):
    await storage.exercises.add(make_exercise("e1", title="One"))
    svc = JourneyService(storage)
    journey = await svc.save_journey("Week 1", ["e1", "gone", "e1"])

    items = await svc.resolve(journey)
    assert [(i.position, i.title) for i in items] == [(0, "One"), (1, UNKNOWN_EXERCISE), (2, "One")]

    edited = await svc.save_journey("Week 1b", ["e1"], journey.id)
    assert edited.created_at == journey.created_at
    stored = await storage.journeys.list()
    assert len(stored) == 1
    assert stored[0].name == "Week 1b"

    with pytest.raises(InvalidRecordError):
        await svc.save_journey(" ", [])


@pytest.mark.asyncio
async def test_naive_and_aware_journeys_sort_together(storage, store):
    await storage.journeys.add(make_journey("legacy", [], created_at=datetime(2024, 1, 1)))
    store.data[storage.journeys.key] = store.data[storage.journeys.key].replace("+00:00", "")
    svc = JourneyService(storage)
    await svc.save_journey("new", [])

    ordered = await svc.journeys_newest_first()
    assert [j.name for j in ordered] == ["new", "Journey legacy"]
    assert ordered[1].created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
