from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.events.dependencies import get_event_controller
from src.events.dtos import EventNotFoundError, EventValidationError
from src.events.lifecycle import EventLifecycleController
from src.events.schemas import EventUpdateRequest, EventUpdateResponse
from src.events.urls import EVENT_URL

router = APIRouter()


@router.put(EVENT_URL, response_model=EventUpdateResponse)
async def update_event(
    event_id: UUID,
    request: EventUpdateRequest,
    controller: EventLifecycleController = Depends(get_event_controller),
) -> EventUpdateResponse:
    """
    Update an event and return the field changes.

    With updateType "single" and an instanceDate, an update to a recurring
    event creates an exception for that occurrence instead of editing the
    series. The response then carries the exception and isRecurringException.
    """
    try:
        result = await controller.update_event(
            event_id,
            request.to_fields_dto(),
            update_type=request.update_type,
            instance_date=request.instance_date,
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"message": "Invalid event fields", "fields": e.fields},
        )
    return EventUpdateResponse.from_dto(result)
