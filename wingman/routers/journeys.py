from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from wingman.domain.records import InvalidRecordError
from wingman.services.journey_service import JourneyService

from .deps import get_storage

router = APIRouter(prefix="/journeys", tags=["journeys"])


def _exercise_ids(payload: dict) -> list[str]:
    ids = payload.get("exerciseIds", [])
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise InvalidRecordError("TrainingJourney.exerciseIds must be a list of strings")
    return ids


@router.get("")
async def list_journeys(request: Request):
    svc = JourneyService(get_storage(request))
    return [journey.to_payload() for journey in await svc.journeys_newest_first()]


@router.post("", status_code=201)
async def create_journey(request: Request, payload: dict):
    svc = JourneyService(get_storage(request))
    journey = await svc.save_journey(str(payload.get("name") or ""), _exercise_ids(payload))
    return journey.to_payload()


@router.get("/{journey_id}")
async def get_journey(journey_id: str, request: Request):
    storage = get_storage(request)
    journey = await storage.journeys.get(journey_id)
    if not journey:
        raise HTTPException(404, "Journey not found")
    playlist = await JourneyService(storage).resolve(journey)
    return {
        **journey.to_payload(),
        "playlist": [{"exerciseId": item.exercise_id, "title": item.title} for item in playlist],
    }


@router.put("/{journey_id}")
async def update_journey(journey_id: str, request: Request, payload: dict):
    storage = get_storage(request)
    if not await storage.journeys.get(journey_id):
        raise HTTPException(404, "Journey not found")
    svc = JourneyService(storage)
    journey = await svc.save_journey(str(payload.get("name") or ""), _exercise_ids(payload), journey_id)
    return journey.to_payload()


@router.delete("/{journey_id}", status_code=204)
async def delete_journey(journey_id: str, request: Request):
    await JourneyService(get_storage(request)).delete_journey(journey_id)
    return Response(status_code=204)
