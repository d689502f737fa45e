from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.events.dependencies import get_event_controller
from src.events.dtos import EventNotDeletedError, EventNotFoundError, RetentionExpiredError
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventResponse
from src.events.urls import RECOVER_EVENT_URL

router = APIRouter()


@router.post(RECOVER_EVENT_URL, response_model=EventResponse)
async def recover_event(
    event_id: UUID,
    controller: EventLifecycleController = Depends(get_event_controller),
) -> EventResponse:
    """Restore a deleted event within 24 hours of its deletion."""
    try:
        event = await controller.recover_event(event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (EventNotDeletedError, RetentionExpiredError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EventResponse.from_dto(event)
