from fastapi import Depends

from src.directory.directory import member_directory
from src.events.clock import SystemClock
from src.events.lifecycle import EventLifecycleController
from src.events.repository.store import EventStore, SqlEventStore


def get_event_store() -> EventStore:
    """Dependency to get the event store instance."""
    return SqlEventStore(clock=SystemClock())


def get_event_controller(
    store: EventStore = Depends(get_event_store),
) -> EventLifecycleController:
    """Dependency to get the lifecycle controller instance."""
    return EventLifecycleController(store=store, directory=member_directory)
