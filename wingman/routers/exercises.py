from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, Response

from wingman.domain.records import Exercise
from wingman.services.catalog_service import CatalogService
from wingman.services.journal_service import JournalService

from .deps import get_storage

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(request: Request, q: str = "", tag: list[str] = Query(default=[])):
    svc = CatalogService(get_storage(request))
    return [exercise.to_payload() for exercise in await svc.search(q, tag)]


@router.get("/tags")
async def list_tags(request: Request):
    return await CatalogService(get_storage(request)).all_tags()


@router.post("", status_code=201)
async def create_exercise(request: Request, payload: dict):
    exercise = Exercise.from_payload(payload)
    await get_storage(request).exercises.add(exercise)
    return exercise.to_payload()


@router.get("/{exercise_id}")
async def get_exercise(exercise_id: str, request: Request):
    storage = get_storage(request)
    exercise = await storage.exercises.get(exercise_id)
    if not exercise:
        raise HTTPException(404, "Exercise not found")
    entries = await JournalService(storage).entries_for_exercise(exercise_id)
    return {**exercise.to_payload(), "journalEntries": [entry.to_payload() for entry in entries]}


@router.put("/{exercise_id}")
async def update_exercise(exercise_id: str, request: Request, payload: dict):
    exercise = Exercise.from_payload({**payload, "id": exercise_id})
    updated = await get_storage(request).exercises.update(exercise)
    return {"updated": updated}


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(exercise_id: str, request: Request):
    await CatalogService(get_storage(request)).delete_exercise(exercise_id)
    return Response(status_code=204)
