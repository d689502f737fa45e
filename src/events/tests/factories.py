"""Builders for event test data."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from src.events.dtos import EventDTO, EventFieldsDTO

START = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def standup(**overrides) -> EventFieldsDTO:
    values = dict(
        title="Standup",
        description="daily",
        start_date=START,
        end_date=START + timedelta(minutes=15),
        timezone="UTC",
    )
    values.update(overrides)
    return EventFieldsDTO(**values)


def make_event(**overrides) -> EventDTO:
    values = dict(
        id=uuid4(),
        title="Standup",
        description="daily",
        start_date=START,
        end_date=START + timedelta(minutes=15),
        timezone="UTC",
        created_at=START,
        updated_at=START,
    )
    values.update(overrides)
    return EventDTO(**values)
