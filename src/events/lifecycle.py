"""Lifecycle controller: create, update, delete, recover and purge events.

Updating a single occurrence of a recurring series forks an exception record
and leaves the series untouched. Deletion is soft; a deleted event can be
recovered for RETENTION_WINDOW, after which the purge sweep removes it.
"""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic.alias_generators import to_camel

from src.directory.directory import MemberDirectory
from src.events.changes import diff
from src.events.dtos import (
    NULLABLE_FIELDS,
    REQUIRED_FIELDS,
    RETENTION_WINDOW,
    TRACKED_FIELDS,
    UNSET,
    EventAlreadyDeletedError,
    EventDTO,
    EventFieldsDTO,
    EventNotDeletedError,
    EventNotFoundError,
    EventUpdateResultDTO,
    EventValidationError,
    GuestKind,
    NewEventDTO,
    Recurrence,
    RetentionExpiredError,
    StorageFailureError,
    UpdateType,
    to_utc,
)
from src.events.repository.store import EventStore

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "description", "timezone")


def _is_blank(value: Any) -> bool:
    if value is UNSET or value is None:
        return True
    return isinstance(value, str) and not value.strip()


class EventLifecycleController:
    def __init__(self, store: EventStore, directory: MemberDirectory | None = None) -> None:
        self.store = store
        self.directory = directory

    async def create_event(self, data: EventFieldsDTO) -> EventDTO:
        """Validate and store a new event.

        Absent optional fields take their defaults: no recurrence, email
        notifications with a one day reminder, team privacy and no guests.

        Raises:
            EventValidationError: a required field is missing or a field is invalid
        """
        values = data.set_fields()
        self._validate(values, required=REQUIRED_FIELDS)
        self._check_time_range(values["start_date"], values["end_date"])

        values["guests"] = tuple(values.get("guests", ()))
        event = await self.store.create(NewEventDTO(**values))
        logger.info(f"Created event {event.id} - {event.title}")
        return event

    async def list_events(self) -> list[EventDTO]:
        return await self.store.list_active()

    async def get_event(self, event_id: UUID) -> EventDTO:
        event = await self.store.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def update_event(
        self,
        event_id: UUID,
        patch: EventFieldsDTO,
        update_type: UpdateType | None = None,
        instance_date: datetime | None = None,
    ) -> EventUpdateResultDTO:
        """Apply a patch to an event and report what changed.

        For a recurring series with update_type SINGLE and an instance_date,
        a new exception record is created from the series overlaid with the
        patch; the series itself is not modified. Any other update is applied
        in place. Series edits do not propagate to existing exceptions.

        Raises:
            EventNotFoundError: no live event has this id
            EventValidationError: a patch field is invalid, or the resulting
                event would not end after it starts
        """
        original = await self.store.find_by_id(event_id)
        if original is None:
            logger.warning(f"Update rejected, event {event_id} not found")
            raise EventNotFoundError(event_id)

        values = patch.set_fields()
        invalid = self._invalid_fields(values)
        recurring = values.get("recurring")
        if original.is_exception and recurring is not None and recurring.enabled:
            invalid.append("recurring")
        if invalid:
            raise EventValidationError(invalid)

        forks = (
            original.recurring.enabled
            and update_type == UpdateType.SINGLE
            and instance_date is not None
        )
        if forks:
            content = self._build_exception(original, values, to_utc(instance_date))
            self._check_time_range(content.start_date, content.end_date)
        else:
            self._check_time_range(
                values.get("start_date", original.start_date),
                values.get("end_date", original.end_date),
            )

        changes = tuple(diff(original, patch))

        if forks:
            exception = await self.store.create(content)
            logger.info(
                f"Forked exception {exception.id} from series {original.id} "
                f"for occurrence {exception.instance_date.isoformat()}"
            )
            return EventUpdateResultDTO(
                event=exception, changes=changes, is_recurring_exception=True
            )

        updated = await self.store.update(event_id, patch)
        logger.info(f"Updated event {event_id} ({len(changes)} changes)")
        return EventUpdateResultDTO(event=updated, changes=changes, is_recurring_exception=False)

    async def delete_event(self, event_id: UUID) -> EventDTO:
        """Soft-delete an event.

        Raises:
            EventNotFoundError: the id does not exist
            EventAlreadyDeletedError: the event is already deleted
        """
        try:
            event = await self.store.soft_delete(event_id)
        except (EventNotFoundError, EventAlreadyDeletedError) as e:
            logger.warning(f"Delete rejected: {e}")
            raise
        logger.info(f"Soft deleted event {event_id}")
        return event

    async def list_deleted_events(self) -> list[EventDTO]:
        return await self.store.list_deleted_within(RETENTION_WINDOW)

    async def recover_event(self, event_id: UUID) -> EventDTO:
        """Reactivate a soft-deleted event within the retention window.

        Raises:
            EventNotFoundError: the id does not exist (or was purged)
            EventNotDeletedError: the event is active
            RetentionExpiredError: the retention window has passed
        """
        try:
            event = await self.store.recover(event_id, RETENTION_WINDOW)
        except (EventNotFoundError, EventNotDeletedError, RetentionExpiredError) as e:
            logger.warning(f"Recover rejected: {e}")
            raise
        logger.info(f"Recovered event {event_id}")
        return event

    async def purge_sweep(self) -> int:
        """Permanently remove events deleted longer than the retention window.

        Runs unattended, so storage failures are logged and reported as zero
        purged events; the next sweep tries again.
        """
        try:
            purged = await self.store.purge_expired(RETENTION_WINDOW)
        except StorageFailureError as e:
            logger.error(f"Purge sweep failed: {e}", exc_info=True)
            return 0

        if purged:
            logger.info(f"Purge sweep removed {purged} expired events")
        else:
            logger.debug("Purge sweep found no expired events")
        return purged

    def _validate(self, values: dict[str, Any], required: tuple[str, ...] = ()) -> None:
        missing = [name for name in required if _is_blank(values.get(name, UNSET))]
        invalid = self._invalid_fields(values)
        offending = [
            to_camel(name)
            for name in TRACKED_FIELDS
            if name in missing or to_camel(name) in invalid
        ]
        if offending:
            raise EventValidationError(offending)

    def _check_time_range(self, start: datetime, end: datetime) -> None:
        if to_utc(end) <= to_utc(start):
            logger.warning(f"Rejected time range {start.isoformat()} - {end.isoformat()}")
            raise EventValidationError(["endDate"])

    def _invalid_fields(self, values: dict[str, Any]) -> list[str]:
        """camelCase names of present fields holding unacceptable values."""
        invalid = []
        for name, value in values.items():
            if value is None:
                if name not in NULLABLE_FIELDS:
                    invalid.append(to_camel(name))
            elif name in _TEXT_FIELDS and _is_blank(value):
                invalid.append(to_camel(name))
            elif name == "guests" and not self._guests_valid(value):
                invalid.append(to_camel(name))
        return invalid

    def _guests_valid(self, guests) -> bool:
        identities = [guest.identity for guest in guests]
        if len(identities) != len(set(identities)):
            return False
        if self.directory is None:
            return True
        return all(
            self.directory.has_member(guest.id)
            for guest in guests
            if guest.kind == GuestKind.USER
        )

    def _build_exception(
        self, series: EventDTO, values: dict[str, Any], instance_date: datetime
    ) -> NewEventDTO:
        content = {name: getattr(series, name) for name in TRACKED_FIELDS}
        content.update(values)
        if "start_date" not in values:
            content["start_date"] = instance_date
        if "end_date" not in values:
            content["end_date"] = content["start_date"] + (series.end_date - series.start_date)
        content["guests"] = tuple(content["guests"])
        content["recurring"] = Recurrence(enabled=False)
        return NewEventDTO(
            **content,
            parent_event_id=series.id,
            instance_date=instance_date,
            is_exception=True,
        )
