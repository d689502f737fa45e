from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.events.dependencies import get_event_controller
from src.events.dtos import EventAlreadyDeletedError, EventNotFoundError
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventDeletedResponse
from src.events.urls import EVENT_URL

router = APIRouter()


@router.delete(EVENT_URL, response_model=EventDeletedResponse)
async def delete_event(
    event_id: UUID,
    controller: EventLifecycleController = Depends(get_event_controller),
) -> EventDeletedResponse:
    """Soft-delete an event. It can be recovered for 24 hours."""
    try:
        event = await controller.delete_event(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventAlreadyDeletedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EventDeletedResponse(
        message="Event deleted successfully",
        id=event.id,
        deleted_at=event.deleted_at,
    )
