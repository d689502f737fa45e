"""Types shared by the event store, the change tracker and the lifecycle controller.

Stored events travel as frozen dataclasses, never ORM models. Structured
sub-documents (location, guests, recurrence, notifications) are frozen pydantic
models so that illegal values fail at construction.
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from src.events.repository.orm_models import Event

# Single source for recover, the deleted-events listing and the purge sweep.
RETENTION_WINDOW = timedelta(hours=24)


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Frequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Reminder(str, Enum):
    NONE = "none"
    FIFTEEN_MINUTES = "15min"
    ONE_HOUR = "1hour"
    ONE_DAY = "1day"
    ONE_WEEK = "1week"


class Privacy(str, Enum):
    TEAM = "team"
    PUBLIC = "public"


class GuestKind(str, Enum):
    USER = "user"
    EXTERNAL = "external"


class UpdateType(str, Enum):
    SINGLE = "single"
    SERIES = "series"


class ChangeType(str, Enum):
    TITLE_CHANGED = "title_changed"
    DESCRIPTION_CHANGED = "description_changed"
    START_TIME_CHANGED = "start_time_changed"
    END_TIME_CHANGED = "end_time_changed"
    TIMEZONE_CHANGED = "timezone_changed"
    LOCATION_CHANGED = "location_changed"
    TEAM_CHANGED = "team_changed"
    GUESTS_CHANGED = "guests_changed"
    RECURRING_CHANGED = "recurring_changed"
    RSVP_REQUIRED_CHANGED = "rsvpRequired_changed"
    NOTIFICATIONS_CHANGED = "notifications_changed"
    PRIVACY_CHANGED = "privacy_changed"


class EventServiceError(Exception):
    """Base class for failures reported by the event lifecycle."""


class EventValidationError(EventServiceError):
    """Raised when required input is missing or invalid."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing or invalid fields: {', '.join(fields)}")


class EventNotFoundError(EventServiceError):
    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        super().__init__(f"Event '{event_id}' not found")


class EventAlreadyDeletedError(EventServiceError):
    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        super().__init__(f"Event '{event_id}' is already deleted")


class EventNotDeletedError(EventServiceError):
    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        super().__init__(f"Event '{event_id}' is not deleted")


class RetentionExpiredError(EventServiceError):
    def __init__(self, event_id: UUID) -> None:
        self.event_id = event_id
        hours = int(RETENTION_WINDOW.total_seconds() // 3600)
        super().__init__(
            f"Event '{event_id}' was deleted more than {hours} hours ago and can no longer be recovered"
        )


class StorageFailureError(EventServiceError):
    """Raised when the underlying database is unavailable or rejects a statement."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Coordinates(ValueObject):
    lat: float
    lng: float


class Location(ValueObject):
    address: str | None = None
    place_id: str | None = None
    coordinates: Coordinates | None = None


class Guest(ValueObject):
    kind: GuestKind = Field(alias="type")
    id: str | None = None
    name: str | None = None
    email: EmailStr | None = None

    @model_validator(mode="after")
    def check_identifier(self) -> "Guest":
        if self.kind == GuestKind.USER and not self.id:
            raise ValueError("user guests must reference a member id")
        if self.kind == GuestKind.EXTERNAL and not (self.name and self.name.strip() and self.email):
            raise ValueError("external guests need a name and an email")
        return self

    @property
    def identity(self) -> tuple[GuestKind, str]:
        """Key that must be unique among the guests of one event."""
        if self.kind == GuestKind.USER:
            return self.kind, self.id
        return self.kind, self.email.lower()


class Recurrence(ValueObject):
    enabled: bool = False
    frequency: Frequency = Frequency.WEEKLY
    interval: int = Field(default=1, ge=1)
    end_date: datetime | None = None

    @field_validator("end_date")
    @classmethod
    def normalize_end_date(cls, value: datetime | None) -> datetime | None:
        return to_utc(value) if value is not None else None


class Notifications(ValueObject):
    email: bool = True
    reminder: Reminder = Reminder.ONE_DAY


class _Unset:
    """Marks a field that is absent from a partial event structure."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

# Order matters: change lists follow it.
TRACKED_FIELDS = (
    "title",
    "description",
    "start_date",
    "end_date",
    "timezone",
    "location",
    "team",
    "guests",
    "recurring",
    "rsvp_required",
    "notifications",
    "privacy",
)

REQUIRED_FIELDS = ("title", "description", "start_date", "end_date", "timezone")

NULLABLE_FIELDS = ("location", "team")


@dataclass(frozen=True)
class EventFieldsDTO:
    """Partial event: creation input or update patch.

    Fields left as ``UNSET`` are absent. ``None`` is an explicit null.
    """

    title: str | None = UNSET
    description: str | None = UNSET
    start_date: datetime | None = UNSET
    end_date: datetime | None = UNSET
    timezone: str | None = UNSET
    location: Location | None = UNSET
    team: str | None = UNSET
    guests: tuple[Guest, ...] | None = UNSET
    recurring: Recurrence | None = UNSET
    rsvp_required: bool | None = UNSET
    notifications: Notifications | None = UNSET
    privacy: Privacy | None = UNSET

    def set_fields(self) -> dict[str, Any]:
        """Present fields in tracked-field order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class NewEventDTO:
    """Complete event content handed to the store for insertion."""

    title: str
    description: str
    start_date: datetime
    end_date: datetime
    timezone: str
    location: Location | None = None
    team: str | None = None
    guests: tuple[Guest, ...] = ()
    recurring: Recurrence = field(default_factory=Recurrence)
    rsvp_required: bool = False
    notifications: Notifications = field(default_factory=Notifications)
    privacy: Privacy = Privacy.TEAM
    parent_event_id: UUID | None = None
    instance_date: datetime | None = None
    is_exception: bool = False


@dataclass(frozen=True)
class EventDTO:
    """A stored event."""

    id: UUID
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    timezone: str
    created_at: datetime
    updated_at: datetime
    location: Location | None = None
    team: str | None = None
    guests: tuple[Guest, ...] = ()
    recurring: Recurrence = field(default_factory=Recurrence)
    rsvp_required: bool = False
    notifications: Notifications = field(default_factory=Notifications)
    privacy: Privacy = Privacy.TEAM
    is_deleted: bool = False
    deleted_at: datetime | None = None
    parent_event_id: UUID | None = None
    instance_date: datetime | None = None
    is_exception: bool = False

    @classmethod
    def from_orm_model(cls, event: "Event") -> "EventDTO":
        """Create EventDTO from Event ORM model."""
        return cls(
            id=event.uuid,
            title=event.title,
            description=event.description,
            start_date=to_utc(event.start_date),
            end_date=to_utc(event.end_date),
            timezone=event.timezone,
            created_at=to_utc(event.created_at),
            updated_at=to_utc(event.updated_at),
            location=Location.model_validate(event.location) if event.location else None,
            team=event.team,
            guests=tuple(Guest.model_validate(guest) for guest in event.guests or []),
            recurring=Recurrence.model_validate(event.recurring or {}),
            rsvp_required=event.rsvp_required,
            notifications=Notifications.model_validate(event.notifications or {}),
            privacy=Privacy(event.privacy),
            is_deleted=event.is_deleted,
            deleted_at=to_utc(event.deleted_at) if event.deleted_at else None,
            parent_event_id=event.parent_event_id,
            instance_date=to_utc(event.instance_date) if event.instance_date else None,
            is_exception=event.is_exception,
        )


@dataclass(frozen=True)
class ChangeDTO:
    """One field that differs between an event and the patch applied to it."""

    field: str
    old_value: Any
    new_value: Any
    change_type: ChangeType


@dataclass(frozen=True)
class EventUpdateResultDTO:
    event: EventDTO
    changes: tuple[ChangeDTO, ...]
    is_recurring_exception: bool
