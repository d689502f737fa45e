"""Event store - persistence of event documents. Returns DTOs, never ORM models.

Every mutating operation touches a single row inside one transaction. Deletion
state transitions are conditional UPDATE statements, so a purge racing a
recover on the same id resolves to exactly one of them.
"""

import contextlib
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import fields
from datetime import timedelta
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.clock import Clock, SystemClock
from src.events.dtos import (
    RETENTION_WINDOW,
    EventAlreadyDeletedError,
    EventDTO,
    EventFieldsDTO,
    EventNotDeletedError,
    EventNotFoundError,
    NewEventDTO,
    RetentionExpiredError,
    StorageFailureError,
    to_utc,
)
from src.events.repository.orm_models import Event

logger = logging.getLogger(__name__)

_INSTANT_COLUMNS = ("start_date", "end_date", "instance_date")
_DOCUMENT_COLUMNS = ("location", "recurring", "notifications")


def _column_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Convert DTO field values into what the ORM columns store."""
    columns = {}
    for name, value in values.items():
        if value is not None:
            if name in _INSTANT_COLUMNS:
                value = to_utc(value)
            elif name in _DOCUMENT_COLUMNS:
                value = value.model_dump(mode="json", by_alias=True)
            elif name == "guests":
                value = [
                    guest.model_dump(mode="json", by_alias=True, exclude_none=True)
                    for guest in value
                ]
        columns[name] = value
    return columns


@contextlib.contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate database errors into StorageFailureError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Storage failure during {operation}: {e}", exc_info=True)
        raise StorageFailureError(operation) from e


class EventStore(ABC):
    """Abstract base class for event persistence."""

    @abstractmethod
    async def create(self, data: NewEventDTO) -> EventDTO:
        """Insert a new event, assigning its id and created_at."""
        raise NotImplementedError

    @abstractmethod
    async def find_by_id(self, event_id: UUID, include_deleted: bool = False) -> EventDTO | None:
        """Return the event, or None. Soft-deleted events only with include_deleted."""
        raise NotImplementedError

    @abstractmethod
    async def list_active(self) -> list[EventDTO]:
        """Events that are not soft-deleted, most recently created first."""
        raise NotImplementedError

    @abstractmethod
    async def list_deleted_within(self, window: timedelta) -> list[EventDTO]:
        """Soft-deleted events with deleted_at inside the window, most recently deleted first."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, event_id: UUID, patch: EventFieldsDTO) -> EventDTO:
        """Merge the present patch fields into a live event.

        Raises:
            EventNotFoundError: no live event has this id
        """
        raise NotImplementedError

    @abstractmethod
    async def soft_delete(self, event_id: UUID) -> EventDTO:
        """Mark an event deleted now.

        Raises:
            EventNotFoundError: the id does not exist
            EventAlreadyDeletedError: the event is already soft-deleted
        """
        raise NotImplementedError

    @abstractmethod
    async def recover(self, event_id: UUID, window: timedelta = RETENTION_WINDOW) -> EventDTO:
        """Reactivate a soft-deleted event deleted no longer than ``window`` ago.

        Raises:
            EventNotFoundError: the id does not exist
            EventNotDeletedError: the event is active
            RetentionExpiredError: the event was deleted more than ``window`` ago
        """
        raise NotImplementedError

    @abstractmethod
    async def purge_expired(self, window: timedelta = RETENTION_WINDOW) -> int:
        """Permanently remove events deleted more than ``window`` ago. Returns the count."""
        raise NotImplementedError


class SqlEventStore(EventStore):
    """SQL implementation of the event store."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock or SystemClock()

    async def create(self, data: NewEventDTO) -> EventDTO:
        now = self.clock.now()
        values = _column_values({f.name: getattr(data, f.name) for f in fields(data)})
        with storage_errors("create"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                event = Event(
                    **values,
                    is_deleted=False,
                    deleted_at=None,
                    created_at=now,
                    updated_at=now,
                )
                session.add(event)
                await session.flush()
                return EventDTO.from_orm_model(event)

    async def find_by_id(self, event_id: UUID, include_deleted: bool = False) -> EventDTO | None:
        with storage_errors("find_by_id"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                event = await self._get_event(session, event_id)
                if event is None or (event.is_deleted and not include_deleted):
                    return None
                return EventDTO.from_orm_model(event)

    async def list_active(self) -> list[EventDTO]:
        stmt = (
            select(Event)
            .where(Event.is_deleted.is_(False))
            .order_by(Event.created_at.desc())
        )
        with storage_errors("list_active"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                return [EventDTO.from_orm_model(event) for event in result.scalars().all()]

    async def list_deleted_within(self, window: timedelta) -> list[EventDTO]:
        cutoff = self.clock.now() - window
        stmt = (
            select(Event)
            .where(Event.is_deleted.is_(True))
            .where(Event.deleted_at >= cutoff)
            .order_by(Event.deleted_at.desc())
        )
        with storage_errors("list_deleted_within"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                return [EventDTO.from_orm_model(event) for event in result.scalars().all()]

    async def update(self, event_id: UUID, patch: EventFieldsDTO) -> EventDTO:
        stmt = (
            select(Event)
            .where(Event.uuid == event_id)
            .where(Event.is_deleted.is_(False))
            .with_for_update()
        )
        with storage_errors("update"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                event = result.scalar_one_or_none()
                if event is None:
                    raise EventNotFoundError(event_id)

                for name, value in _column_values(patch.set_fields()).items():
                    setattr(event, name, value)
                event.updated_at = self.clock.now()

                await session.flush()
                return EventDTO.from_orm_model(event)

    async def soft_delete(self, event_id: UUID) -> EventDTO:
        now = self.clock.now()
        stmt = (
            update(Event)
            .where(Event.uuid == event_id)
            .where(Event.is_deleted.is_(False))
            .values(is_deleted=True, deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("soft_delete"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                event = await self._get_event(session, event_id)
                if result.rowcount == 0:
                    if event is None:
                        raise EventNotFoundError(event_id)
                    raise EventAlreadyDeletedError(event_id)
                return EventDTO.from_orm_model(event)

    async def recover(self, event_id: UUID, window: timedelta = RETENTION_WINDOW) -> EventDTO:
        now = self.clock.now()
        stmt = (
            update(Event)
            .where(Event.uuid == event_id)
            .where(Event.is_deleted.is_(True))
            .where(Event.deleted_at >= now - window)
            .values(is_deleted=False, deleted_at=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("recover"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                event = await self._get_event(session, event_id)
                if result.rowcount == 0:
                    if event is None:
                        raise EventNotFoundError(event_id)
                    if not event.is_deleted:
                        raise EventNotDeletedError(event_id)
                    raise RetentionExpiredError(event_id)
                return EventDTO.from_orm_model(event)

    async def purge_expired(self, window: timedelta = RETENTION_WINDOW) -> int:
        stmt = (
            delete(Event)
            .where(Event.is_deleted.is_(True))
            .where(Event.deleted_at < self.clock.now() - window)
            .execution_options(synchronize_session=False)
        )
        with storage_errors("purge_expired"):
            async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
                result = await session.execute(stmt)
                return result.rowcount

    async def _get_event(self, session: AsyncSession, event_id: UUID) -> Event | None:
        """Load an event regardless of deletion state, refreshing any cached instance."""
        stmt = (
            select(Event)
            .where(Event.uuid == event_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()
