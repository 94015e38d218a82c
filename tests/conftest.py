"""Root conftest — shared fixtures for the session stack.

Invariants:
    - Every test gets its own SQLite file under tmp_path
    - The backend is a FakeIdentityBackend served through FaultInjectingTransport
    - No test touches the network
"""

import os

# Keep Settings() from picking up a developer's real backend
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest

from authsession.infrastructure.backend_client import IdentityBackendClient
from authsession.infrastructure.database import DatabaseSessionManager
from authsession.infrastructure.navigation import HistoryNavigator
from authsession.infrastructure.token_store import SqlTokenStore
from authsession.services.session_manager import SessionManager

from tests.fake_backend import FakeIdentityBackend, FaultInjectingTransport

BACKEND_URL = "http://backend.test"


@pytest.fixture
def fake_backend():
    return FakeIdentityBackend()


@pytest.fixture
def transport(fake_backend):
    return FaultInjectingTransport(httpx.ASGITransport(app=fake_backend.app))


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'tokens.db'}"


@pytest.fixture
async def db(database_url):
    manager = DatabaseSessionManager(database_url)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def token_store(db):
    return SqlTokenStore(db)


@pytest.fixture
async def backend_client(transport):
    client = IdentityBackendClient(BACKEND_URL, transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def navigator():
    return HistoryNavigator()


@pytest.fixture
def session_manager(backend_client, token_store, navigator):
    return SessionManager(backend_client, token_store, navigator)
