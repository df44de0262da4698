"""Route test fixtures — async DB, swappable connection manager, scripted price APIs.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db_manager overridden: get_db and fallback reads both use the test engine
    - unreachable_db swaps in a manager whose handshake always fails
    - price_responses scripts provider replies per host; unlisted hosts fail

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Fake manager built with __new__: skips engine creation, reuses the test engine
    - httpx.MockTransport over patching PriceClient: the real provider order,
      parsing and fallback code runs
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from skillbridge.api.routes import ledger
from skillbridge.core.errors import DatabaseConnectionError
from skillbridge.core.governance import sample_proposals
from skillbridge.db.base import Base
from skillbridge.infrastructure.database import (
    DatabaseSessionManager, find_db_manager, get_db_manager,
)
from skillbridge.infrastructure.price_client import PriceClient, get_price_client
from skillbridge.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


def _fake_manager(engine, session_factory, connected=True) -> DatabaseSessionManager:
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = session_factory
    manager.max_attempts = 3
    manager.retry_delay_ms = 0
    manager.connected = connected
    return manager


class _UnreachableManager(DatabaseSessionManager):
    """Manager whose handshake always fails, counting the calls."""

    def __init__(self):
        self.connected = False
        self.max_attempts = 3
        self.retry_delay_ms = 0
        self.connect_calls = 0

    async def connect(self) -> None:
        self.connect_calls += 1
        raise DatabaseConnectionError(self.max_attempts)


@pytest.fixture
def price_responses():
    """Map of host -> JSON body (or status int) served by the mock transport."""
    return {}


@pytest.fixture
def price_requests():
    return []


@pytest.fixture
def price_client(price_responses, price_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        price_requests.append(request)
        reply = price_responses.get(request.url.host)
        if reply is None:
            raise httpx.ConnectError("unreachable", request=request)
        if isinstance(reply, int):
            return httpx.Response(reply)
        return httpx.Response(200, json=reply)

    return PriceClient(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture(autouse=True)
def fresh_governance(monkeypatch):
    """Votes mutate module state; give every test the untouched sample list."""
    monkeypatch.setattr(ledger, "_proposals", sample_proposals())


@pytest.fixture
async def client(test_engine, test_session_factory, price_client):
    """FastAPI test client with the connection manager and price client overridden."""
    manager = _fake_manager(test_engine, test_session_factory)
    app.dependency_overrides[get_db_manager] = lambda: manager
    app.dependency_overrides[find_db_manager] = lambda: manager
    app.dependency_overrides[get_price_client] = lambda: price_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await price_client.aclose()


@pytest.fixture
def unreachable_db(client):
    """Swap the manager for one that cannot connect; returns it for assertions."""
    manager = _UnreachableManager()
    app.dependency_overrides[get_db_manager] = lambda: manager
    return manager
