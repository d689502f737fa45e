"""Tests for PurgeSweeper."""

import asyncio

import pytest

from src.events.lifecycle import EventLifecycleController
from src.events.sweeper import PurgeSweeper
from src.events.tests.factories import standup
from src.events.tests.inmemory_store import FailingEventStore


class CountingController:
    """Stands in for the controller and counts sweeps."""

    def __init__(self, error: Exception | None = None):
        self.sweeps = 0
        self.error = error

    async def purge_sweep(self) -> int:
        self.sweeps += 1
        if self.error:
            raise self.error
        return 0


@pytest.mark.asyncio
async def test_sweeper_runs_immediately_and_stops():
    controller = CountingController()
    sweeper = PurgeSweeper(controller, interval=3600)

    sweeper.start()
    await asyncio.sleep(0.01)
    assert sweeper.running
    await sweeper.stop()

    assert controller.sweeps == 1
    assert not sweeper.running


@pytest.mark.asyncio
async def test_sweeper_repeats_on_interval():
    controller = CountingController()
    sweeper = PurgeSweeper(controller, interval=0.01)

    sweeper.start()
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert controller.sweeps >= 3


@pytest.mark.asyncio
async def test_sweeper_survives_unexpected_errors():
    controller = CountingController(error=RuntimeError("boom"))
    sweeper = PurgeSweeper(controller, interval=0.01)

    sweeper.start()
    await asyncio.sleep(0.05)
    await sweeper.stop()

    assert controller.sweeps >= 2


@pytest.mark.asyncio
async def test_sweeper_purges_expired_events(controller, store, clock):
    event = await controller.create_event(standup())
    await controller.delete_event(event.id)
    clock.advance(hours=25)
    sweeper = PurgeSweeper(controller, interval=3600)

    sweeper.start()
    await asyncio.sleep(0.01)
    await sweeper.stop()

    assert store.events == {}


@pytest.mark.asyncio
async def test_sweeper_keeps_running_when_storage_fails(clock):
    store = FailingEventStore(clock)
    controller = EventLifecycleController(store=store)
    await controller.create_event(standup())
    sweeper = PurgeSweeper(controller, interval=0.01)

    sweeper.start()
    await asyncio.sleep(0.05)
    assert sweeper.running
    await sweeper.stop()

    assert store.purge_attempts >= 2
