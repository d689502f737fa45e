from fastapi import APIRouter, Depends

from src.events.dependencies import get_event_controller
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventResponse
from src.events.urls import EVENTS_URL

router = APIRouter()


@router.get(EVENTS_URL, response_model=list[EventResponse])
async def list_events(
    controller: EventLifecycleController = Depends(get_event_controller),
) -> list[EventResponse]:
    """Active events, newest first."""
    events = await controller.list_events()
    return [EventResponse.from_dto(event) for event in events]
