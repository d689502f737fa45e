from fastapi import APIRouter, Depends, HTTPException, status

from src.events.dependencies import get_event_controller
from src.events.dtos import EventValidationError
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventPayload, EventResponse
from src.events.urls import EVENTS_URL

router = APIRouter()


@router.post(EVENTS_URL, response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: EventPayload,
    controller: EventLifecycleController = Depends(get_event_controller),
) -> EventResponse:
    """
    Create an event.

    title, description, startDate, endDate and timezone are required.
    """
    try:
        event = await controller.create_event(payload.to_fields_dto())
    except EventValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Missing or invalid required fields", "fields": e.fields},
        )
    return EventResponse.from_dto(event)
