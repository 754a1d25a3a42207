"""Service test fixtures — fake cache/mailer and the FastAPI test client.

Invariants:
    - get_db, get_cache and get_mailer overridden on the FastAPI app
    - db_manager patched for the webhook route, which opens its own session
    - The cache runs on a FakeClock so expiry is driven by the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

import intake.infrastructure.database as db_module
from intake.infrastructure.brevo_client import get_mailer
from intake.infrastructure.cache import InMemoryTTLCache, get_cache
from intake.infrastructure.database import DatabaseSessionManager, get_db
from intake.main import app

from tests.fakes import FakeClock, RecordingMailer


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryTTLCache(clock=clock)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
async def client(test_engine, test_session_factory, cache, mailer):
    """FastAPI test client with every collaborator overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_mailer] = lambda: mailer

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
