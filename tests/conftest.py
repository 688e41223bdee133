"""
Shared fixtures for the trip sync test suite.

Provides:
- an in-memory SQLite database with the shared trip already created
- a fake place lookup whose result or failure each test can set
- a fake Socket.IO server that records every emit
- an async HTTP client bound to the FastAPI app
"""

import os

# Ensure test env vars before any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_URL"] = ""
os.environ["GOOGLE_PLACES_API_KEY"] = ""

from typing import Any, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import get_db
from app.core.init_db import ensure_default_trip, init_db
from app.dependencies.trip import get_place_lookup
from app.realtime.handlers import SyncHandlers
from app.realtime.hub import BroadcastHub

TRIP_ID = settings.DEFAULT_TRIP_ID


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakePlaceLookup:
    """Stands in for PlaceLookupService. Set `result` or `error` per test."""

    def __init__(self):
        self.result: Optional[Dict[str, Any]] = None
        self.error: Optional[Exception] = None
        self.suggestions: List[Dict[str, Any]] = []
        self.calls: List[str] = []

    async def lookup(self, text: str):
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.result

    async def details(self, place_id: str):
        self.calls.append(place_id)
        if self.error:
            raise self.error
        return self.result

    async def search_locations(self, query: str):
        self.calls.append(query)
        return self.suggestions


class FakeSocketServer:
    """Records emits the way socketio.AsyncServer would send them."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.handlers: Dict[str, Any] = {}

    def on(self, event, handler=None, namespace=None):
        self.handlers[event] = handler

    async def emit(self, event, data=None, to=None, **kwargs):
        self.sent.append({"event": event, "data": data, "to": to})

    def events(self, event: str) -> List[Dict[str, Any]]:
        return [item for item in self.sent if item["event"] == event]

    def recipients(self, event: str) -> set:
        return {item["to"] for item in self.events(event)}


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        await ensure_default_trip(session, TRIP_ID)
    return factory


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Realtime
# ---------------------------------------------------------------------------

@pytest.fixture
def place_lookup():
    return FakePlaceLookup()


@pytest.fixture
def sio():
    return FakeSocketServer()


@pytest.fixture
def hub(sio):
    return BroadcastHub(sio)


@pytest.fixture
def handlers(hub, session_factory, place_lookup):
    return SyncHandlers(hub, session_factory, place_lookup=place_lookup, trip_id=TRIP_ID)


@pytest.fixture
async def connected(handlers, sio):
    """Two connected clients, with the connect traffic cleared."""
    await handlers.connect("alice", {})
    await handlers.connect("bob", {})
    sio.sent.clear()
    return ["alice", "bob"]


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
async def api_app(session_factory, place_lookup):
    from app.main import app as _app

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_place_lookup():
        return place_lookup

    _app.dependency_overrides[get_db] = _get_db
    _app.dependency_overrides[get_place_lookup] = _get_place_lookup
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
async def client(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
