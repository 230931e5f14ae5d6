"""
Single-collection CRUD against the in-memory store with injected failures.
"""
from __future__ import annotations

import pytest

from wingman.domain.records import InvalidRecordError
from wingman.repositories.errors import DecodeError, NotFoundError, PersistenceError, WriteError

from conftest import make_entry, make_exercise, make_journey


@pytest.mark.asyncio
async def test_list_on_empty_store_is_empty(storage):
    assert await storage.exercises.list() == []


@pytest.mark.asyncio
async def test_list_fails_open_on_read_failure(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    store.fail_reads = True
    assert await storage.exercises.list() == []


@pytest.mark.asyncio
async def test_list_propagates_corruption(storage, store):
    store.data[storage.exercises.key] = "[{broken"
    with pytest.raises(DecodeError):
        await storage.exercises.list()


@pytest.mark.asyncio
async def test_add_preserves_insertion_order(storage):
    for eid in ("b", "a", "c"):
        await storage.exercises.add(make_exercise(eid))
    assert [e.id for e in await storage.exercises.list()] == ["b", "a", "c"]


@pytest.mark.asyncio
async def test_failed_replace_all_leaves_state_unchanged(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    store.fail_writes = True
    with pytest.raises(WriteError):
        await storage.exercises.replace_all([])
    with pytest.raises(PersistenceError):
        await storage.exercises.add(make_exercise("e2"))
    store.fail_writes = False
    assert [e.id for e in await storage.exercises.list()] == ["e1"]


@pytest.mark.asyncio
async def test_mutations_fail_closed_when_read_fails(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    store.fail_reads = True
    with pytest.raises(PersistenceError):
        await storage.exercises.add(make_exercise("e2"))
    store.fail_reads = False
    assert [e.id for e in await storage.exercises.list()] == ["e1"]


@pytest.mark.asyncio
async def test_update_replaces_in_place(storage):
    for eid in ("e1", "e2", "e3"):
        await storage.exercises.add(make_exercise(eid))
    changed = await storage.exercises.update(make_exercise("e2", title="Renamed"))
    records = await storage.exercises.list()
    assert changed is True
    assert [e.id for e in records] == ["e1", "e2", "e3"]
    assert records[1].title == "Renamed"


@pytest.mark.asyncio
async def test_update_unknown_id_is_a_silent_no_op(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    before = await storage.exercises.list()
    writes = len(store.writes)

    assert await storage.exercises.update(make_exercise("nope", title="x")) is False
    assert await storage.exercises.list() == before
    assert len(store.writes) == writes


@pytest.mark.asyncio
async def test_remove_twice_raises_not_found_the_second_time(storage):
    await storage.journeys.add(make_journey("t1"))
    await storage.journeys.remove("t1")
    with pytest.raises(NotFoundError):
        await storage.journeys.remove("t1")
    assert await storage.journeys.list() == []


@pytest.mark.asyncio
async def test_duplicate_ids_are_kept_and_update_hits_first_match(storage):
    await storage.exercises.add(make_exercise("dup", title="first"))
    await storage.exercises.add(make_exercise("dup", title="second"))
    assert len(await storage.exercises.list()) == 2

    await storage.exercises.update(make_exercise("dup", title="patched"))
    titles = [e.title for e in await storage.exercises.list()]
    assert titles == ["patched", "second"]


@pytest.mark.asyncio
async def test_remove_drops_every_record_with_the_id(storage):
    await storage.exercises.add(make_exercise("dup"))
    await storage.exercises.add(make_exercise("keep"))
    await storage.exercises.add(make_exercise("dup"))
    await storage.exercises.remove("dup")
    assert [e.id for e in await storage.exercises.list()] == ["keep"]


@pytest.mark.asyncio
async def test_get_and_filter_lookups(storage):
    await storage.exercises.add(make_exercise("e1", difficulty="advanced"))
    await storage.exercises.add(make_exercise("e2"))
    assert (await storage.exercises.get("e2")).id == "e2"
    assert await storage.exercises.get("missing") is None
    advanced = await storage.exercises.filter(lambda e: e.difficulty == "advanced")
    assert [e.id for e in advanced] == ["e1"]


@pytest.mark.asyncio
async def test_collections_use_distinct_keys(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    await storage.journeys.add(make_journey("t1"))
    assert set(store.data) == {"@wingman_exercises", "@wingman_journeys"}


@pytest.mark.parametrize(
    "build",
    [
        lambda: make_exercise(""),
        lambda: make_exercise(title=None),
        lambda: make_exercise(tags=[1]),
        lambda: make_exercise(category=["social-practice"]),
        lambda: make_entry(mood=4.0),
        lambda: make_entry(mood=True),
        lambda: make_entry(completion_date="2024-03-01"),
        lambda: make_journey(exercise_ids=["e1", None]),
    ],
)
def test_records_that_would_not_decode_cannot_be_built(build):
    with pytest.raises(InvalidRecordError):
        build()


@pytest.mark.asyncio
async def test_add_rejects_mutated_record_and_keeps_stored_text(storage, store):
    await storage.journal.add(make_entry("j1"))
    before = store.data[storage.journal.key]

    bad = make_entry("j2")
    bad.mood = 4.0
    with pytest.raises(InvalidRecordError):
        await storage.journal.add(bad)

    blank = make_exercise("e1")
    blank.id = ""
    with pytest.raises(InvalidRecordError):
        await storage.exercises.add(blank)

    assert store.data[storage.journal.key] == before
    assert storage.exercises.key not in store.data
    assert [e.id for e in await storage.journal.list()] == ["j1"]
    await storage.journal.remove("j1")


@pytest.mark.asyncio
async def test_update_and_replace_all_reject_invalid_records(storage, store):
    await storage.exercises.add(make_exercise("e1"))
    before = store.data[storage.exercises.key]

    bad = make_exercise("e1")
    bad.tags = []
    with pytest.raises(InvalidRecordError):
        await storage.exercises.update(bad)
    with pytest.raises(InvalidRecordError):
        await storage.exercises.replace_all([make_journey("t1")])

    assert store.data[storage.exercises.key] == before


@pytest.mark.asyncio
async def test_failed_update_write_leaves_state_unchanged(storage, store):
    await storage.exercises.add(make_exercise("e1", title="original"))
    store.fail_writes = True
    with pytest.raises(PersistenceError):
        await storage.exercises.update(make_exercise("e1", title="changed"))
    store.fail_writes = False
    assert [e.title for e in await storage.exercises.list()] == ["original"]


@pytest.mark.asyncio
async def test_failed_remove_write_leaves_state_unchanged(storage, store):
    await storage.journeys.add(make_journey("t1"))
    store.fail_writes = True
    with pytest.raises(PersistenceError):
        await storage.journeys.remove("t1")
    store.fail_writes = False
    assert [j.id for j in await storage.journeys.list()] == ["t1"]
