from uuid import uuid4

import pytest

from src.events.tests.factories import standup
from src.events.urls import RECOVER_EVENT_URL


@pytest.mark.asyncio
async def test_recover_event(client, controller, clock):
    event = await controller.create_event(standup())
    await controller.delete_event(event.id)
    clock.advance(hours=23, minutes=59)

    response = await client.post(RECOVER_EVENT_URL.format(event_id=event.id))

    assert response.status_code == 200
    data = response.json()
    assert data["isDeleted"] is False
    assert data["deletedAt"] is None


@pytest.mark.asyncio
async def test_recover_after_retention_window_returns_400(client, controller, clock):
    event = await controller.create_event(standup())
    await controller.delete_event(event.id)
    clock.advance(hours=24, minutes=1)

    response = await client.post(RECOVER_EVENT_URL.format(event_id=event.id))

    assert response.status_code == 400
    assert "can no longer be recovered" in response.json()["detail"]


@pytest.mark.asyncio
async def test_recover_active_event_returns_400(client, controller):
    event = await controller.create_event(standup())

    response = await client.post(RECOVER_EVENT_URL.format(event_id=event.id))

    assert response.status_code == 400
    assert "not deleted" in response.json()["detail"]


@pytest.mark.asyncio
async def test_recover_purged_event_returns_404(client, controller, clock):
    event = await controller.create_event(standup())
    await controller.delete_event(event.id)
    clock.advance(hours=25)
    await controller.purge_sweep()

    response = await client.post(RECOVER_EVENT_URL.format(event_id=event.id))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_recover_unknown_event_returns_404(client):
    response = await client.post(RECOVER_EVENT_URL.format(event_id=uuid4()))

    assert response.status_code == 404
