"""Request and response bodies of the events API.

JSON uses camelCase field names; snake_case is accepted on input as well.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from src.events.dtos import (
    TRACKED_FIELDS,
    ChangeDTO,
    ChangeType,
    EventDTO,
    EventFieldsDTO,
    EventUpdateResultDTO,
    Guest,
    Location,
    Notifications,
    Privacy,
    Recurrence,
    UpdateType,
    to_utc,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventPayload(CamelModel):
    """Event fields sent by the client. Every field is optional at this level."""

    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    timezone: str | None = None
    location: Location | None = None
    team: str | None = None
    guests: list[Guest] | None = None
    recurring: Recurrence | None = None
    rsvp_required: bool | None = None
    notifications: Notifications | None = None
    privacy: Privacy | None = None

    @model_validator(mode="after")
    def check_time_range(self) -> "EventPayload":
        if self.start_date and self.end_date and to_utc(self.end_date) <= to_utc(self.start_date):
            raise ValueError("endDate must be after startDate")
        return self

    def to_fields_dto(self) -> EventFieldsDTO:
        """Only the fields the client actually sent, explicit nulls included."""
        values = {name: getattr(self, name) for name in self.model_fields_set if name in TRACKED_FIELDS}
        if values.get("guests") is not None:
            values["guests"] = tuple(values["guests"])
        return EventFieldsDTO(**values)


class EventUpdateRequest(EventPayload):
    update_type: UpdateType | None = None
    instance_date: datetime | None = None


class EventResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    timezone: str
    location: Location | None = None
    team: str | None = None
    guests: list[Guest] = []
    recurring: Recurrence
    rsvp_required: bool
    notifications: Notifications
    privacy: Privacy
    created_at: datetime
    updated_at: datetime
    is_deleted: bool
    deleted_at: datetime | None = None
    parent_event_id: UUID | None = None
    instance_date: datetime | None = None
    is_exception: bool

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls.model_validate(event)


class ChangeResponse(CamelModel):
    field: str
    old_value: Any = None
    new_value: Any = None
    change_type: ChangeType

    @classmethod
    def from_dto(cls, change: ChangeDTO) -> "ChangeResponse":
        return cls(
            field=change.field,
            old_value=change.old_value,
            new_value=change.new_value,
            change_type=change.change_type,
        )


class EventUpdateResponse(CamelModel):
    event: EventResponse
    changes: list[ChangeResponse]
    is_recurring_exception: bool

    @classmethod
    def from_dto(cls, result: EventUpdateResultDTO) -> "EventUpdateResponse":
        return cls(
            event=EventResponse.from_dto(result.event),
            changes=[ChangeResponse.from_dto(change) for change in result.changes],
            is_recurring_exception=result.is_recurring_exception,
        )


class EventDeletedResponse(CamelModel):
    message: str
    id: UUID
    deleted_at: datetime
