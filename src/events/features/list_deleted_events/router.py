from fastapi import APIRouter, Depends

from src.events.dependencies import get_event_controller
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventResponse
from src.events.urls import DELETED_EVENTS_URL

router = APIRouter()


@router.get(DELETED_EVENTS_URL, response_model=list[EventResponse])
async def list_deleted_events(
    controller: EventLifecycleController = Depends(get_event_controller),
) -> list[EventResponse]:
    """Events deleted in the last 24 hours, most recently deleted first."""
    events = await controller.list_deleted_events()
    return [EventResponse.from_dto(event) for event in events]
