import contextlib

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from src.config.database import create_engine
from src.events.dependencies import get_event_controller
from src.events.lifecycle import EventLifecycleController
from src.events.repository import orm_models  # noqa: F401  registers the events table
from src.events.tests.inmemory_store import InMemoryEventStore, ManualClock
from src.main import app
from src.models.base import BaseModel

# Test database: in-memory SQLite shared through a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def store(clock: ManualClock) -> InMemoryEventStore:
    return InMemoryEventStore(clock)


@pytest.fixture
def controller(store: InMemoryEventStore) -> EventLifecycleController:
    return EventLifecycleController(store=store)


@pytest.fixture(scope="function")
async def db_session():
    """Create a test database session on a fresh schema."""
    engine = create_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def client_factory():
    """Build a test client with the given dependency overrides."""

    @contextlib.asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture(scope="function")
async def client(client_factory, controller: EventLifecycleController):
    """Create a test client backed by the in-memory store."""
    async with client_factory({get_event_controller: lambda: controller}) as ac:
        yield ac
