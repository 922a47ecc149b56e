"""Service test fixtures — per-test SQLite store + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - db_manager patched: get_record_store and readiness read it at call time
    - Every test gets a fresh SessionAuthenticator (no tokens leak between tests)

Design Decisions:
    - File-backed SQLite over :memory: so concurrent boundary fetches get their own connections
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from portfolio.api.dependencies import get_authenticator
from portfolio.config import get_settings
from portfolio.core.session_auth import SessionAuthenticator, StaticCredentialVerifier
from portfolio.db.session import create_session_factory, create_tables, drop_tables
from portfolio.infrastructure.database import DatabaseSessionManager
from portfolio.infrastructure.record_store import SqlRecordStore
import portfolio.infrastructure.database as db_module
from portfolio.main import app

ADMIN_EMAIL = get_settings().admin_email
ADMIN_PASSWORD = get_settings().admin_password


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'records.db'}", echo=False,
    )
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def test_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = create_session_factory(test_engine)
    return manager


@pytest.fixture
def store(test_manager):
    return SqlRecordStore(test_manager)


@pytest.fixture
def authenticator():
    return SessionAuthenticator(
        StaticCredentialVerifier(ADMIN_EMAIL, ADMIN_PASSWORD),
    )


@pytest.fixture
async def client(test_manager, authenticator):
    """FastAPI test client wired to the per-test store and authenticator."""
    app.dependency_overrides[get_authenticator] = lambda: authenticator

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def admin_client(client):
    """Client holding a valid session cookie."""
    res = await client.post(
        "/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert res.status_code == 200
    return client
