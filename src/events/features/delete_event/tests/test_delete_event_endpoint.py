from uuid import uuid4

import pytest

from src.events.tests.factories import standup
from src.events.urls import EVENT_URL


@pytest.mark.asyncio
async def test_delete_event(client, controller, store, clock):
    event = await controller.create_event(standup())

    response = await client.delete(EVENT_URL.format(event_id=event.id))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Event deleted successfully"
    assert data["id"] == str(event.id)
    assert data["deletedAt"] is not None
    assert store.events[event.id].is_deleted is True
    assert store.events[event.id].deleted_at == clock.now()


@pytest.mark.asyncio
async def test_delete_already_deleted_event_returns_400(client, controller, clock, store):
    event = await controller.create_event(standup())
    deleted = await controller.delete_event(event.id)
    clock.advance(minutes=10)

    response = await client.delete(EVENT_URL.format(event_id=event.id))

    assert response.status_code == 400
    assert "already deleted" in response.json()["detail"]
    assert store.events[event.id].deleted_at == deleted.deleted_at


@pytest.mark.asyncio
async def test_delete_unknown_event_returns_404(client):
    response = await client.delete(EVENT_URL.format(event_id=uuid4()))

    assert response.status_code == 404
