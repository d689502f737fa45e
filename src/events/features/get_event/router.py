from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.events.dependencies import get_event_controller
from src.events.dtos import EventNotFoundError
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventResponse
from src.events.urls import EVENT_URL

router = APIRouter()


@router.get(EVENT_URL, response_model=EventResponse)
async def get_event(
    event_id: UUID,
    controller: EventLifecycleController = Depends(get_event_controller),
) -> EventResponse:
    try:
        event = await controller.get_event(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return EventResponse.from_dto(event)
