"""Shared pytest fixtures."""

from collections.abc import AsyncIterator

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from ridebook.app import App
from ridebook.config import Config
from ridebook.core.modules.counter.store import MemoryTransactionalStore
from ridebook.web.server import create_fastapi_app


@pytest.fixture
def config():
    """Config backed by the in-memory store, with backoff sleeps disabled."""
    return Config(
        database_url="memory://",
        allocation_max_attempts=5,
        allocation_base_delay=0.0,
        allocation_max_delay=0.0,
    )


@pytest.fixture
def store():
    return MemoryTransactionalStore()


@pytest.fixture
def app(config, store):
    """Application facade wired to the shared in-memory store."""
    return App(config, store)


@pytest.fixture
async def client(app, config) -> AsyncIterator[AsyncClient]:
    """HTTPX async client bound to the FastAPI app, with lifespan started."""
    fastapi_app = create_fastapi_app(app, config)
    async with LifespanManager(fastapi_app) as manager:
        async with AsyncClient(transport=ASGITransport(app=manager.app), base_url="http://testserver") as client:
            yield client
