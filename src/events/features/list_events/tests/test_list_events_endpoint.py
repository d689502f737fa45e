import pytest

from src.events.dependencies import get_event_controller
from src.events.dtos import StorageFailureError
from src.events.lifecycle import EventLifecycleController
from src.events.tests.factories import standup
from src.events.tests.inmemory_store import InMemoryEventStore
from src.events.urls import EVENTS_URL


@pytest.mark.asyncio
async def test_list_events_newest_first_without_deleted(client, controller, clock):
    first = await controller.create_event(standup(title="First"))
    clock.advance(minutes=1)
    second = await controller.create_event(standup(title="Second"))
    clock.advance(minutes=1)
    deleted = await controller.create_event(standup(title="Deleted"))
    await controller.delete_event(deleted.id)

    response = await client.get(EVENTS_URL)

    assert response.status_code == 200
    assert [event["id"] for event in response.json()] == [str(second.id), str(first.id)]


@pytest.mark.asyncio
async def test_list_events_empty(client):
    response = await client.get(EVENTS_URL)

    assert response.status_code == 200
    assert response.json() == []


class UnavailableEventStore(InMemoryEventStore):
    async def list_active(self):
        raise StorageFailureError("list_active")


@pytest.mark.asyncio
async def test_list_events_storage_failure_returns_opaque_500(client_factory, clock):
    controller = EventLifecycleController(store=UnavailableEventStore(clock))

    async with client_factory({get_event_controller: lambda: controller}) as client:
        response = await client.get(EVENTS_URL)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal error"}
