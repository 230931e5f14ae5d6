from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Request, Response

from wingman.domain.records import InvalidRecordError, parse_calendar_date
from wingman.services.journal_service import JournalService

from .deps import get_storage

router = APIRouter(prefix="/journal", tags=["journal"])


def _view_to_dict(view) -> dict:
    return {
        **view.entry.to_payload(),
        "exerciseTitle": view.exercise_title,
        "exerciseCategory": view.exercise_category,
    }


@router.get("")
async def list_entries(request: Request, day: date | None = None):
    svc = JournalService(get_storage(request))
    return [_view_to_dict(view) for view in await svc.timeline(day)]


@router.get("/days")
async def entry_days(request: Request):
    grouped = await JournalService(get_storage(request)).days_with_entries()
    return {day.isoformat(): len(entries) for day, entries in grouped.items()}


@router.post("", status_code=201)
async def create_entry(request: Request, payload: dict):
    mood = payload.get("mood")
    if not isinstance(mood, int):
        raise InvalidRecordError("JournalEntry.mood must be an integer from 1 to 5")
    svc = JournalService(get_storage(request))
    entry = await svc.create_entry(
        exercise_id=str(payload.get("exerciseId") or ""),
        completion_date=parse_calendar_date(payload.get("completionDate")),
        comment=str(payload.get("comment") or ""),
        mood=mood,
    )
    return entry.to_payload()


@router.get("/{entry_id}")
async def get_entry(entry_id: str, request: Request):
    entry = await get_storage(request).journal.get(entry_id)
    if not entry:
        raise HTTPException(404, "Journal entry not found")
    return entry.to_payload()


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(entry_id: str, request: Request):
    await JournalService(get_storage(request)).delete_entry(entry_id)
    return Response(status_code=204)
