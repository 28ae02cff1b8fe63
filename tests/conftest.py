"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tasklist.app import App
from tasklist.config import Config
from tasklist.core.core import Core
from tasklist.core.store import MemoryDocumentStore
from tasklist.utils import now
from tasklist.web.server import create_fastapi_app

TEST_SECRET = "test-secret-key"
BASE_URL = "https://testserver"  # Session cookie is Secure


class FakeClock:
    """Manually advanced clock for TTL expiry in the memory store."""

    def __init__(self) -> None:
        self.current = now()

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def config():
    """Configuration backed by the in-memory store."""
    return Config(database_url="memory://", session_secret_key=TEST_SECRET, _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryDocumentStore(clock=clock)


@pytest_asyncio.fixture
async def core(config, store) -> AsyncGenerator[Core]:
    """Started Core with all indexes created."""
    core = Core(config, store)
    async with core.lifespan():
        yield core


@pytest_asyncio.fixture
async def app(config, store) -> AsyncGenerator[App]:
    """Started App facade."""
    app = App(config, store)
    async with app.lifespan():
        yield app


@pytest_asyncio.fixture
async def make_client(app, config) -> AsyncGenerator[Callable[[], AsyncClient]]:
    """Factory of HTTP clients against one app; each client has its own cookie jar."""
    fastapi_app = create_fastapi_app(app, config)
    clients: list[AsyncClient] = []

    def factory() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=fastapi_app), base_url=BASE_URL)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def client(make_client):
    return make_client()
