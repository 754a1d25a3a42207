"""Root conftest — environment isolation and the shared SQLite document store.

Invariants:
    - Env defaults are set before any intake module reads settings
    - Every test gets a fresh in-memory SQLite database with the real
      unique constraints (StaticPool: one connection shared by all sessions)
"""

import os

# Ensure tests never talk to real services
os.environ.setdefault("BREVO_API_KEY", "brevo-test-fake-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "")
os.environ.setdefault("MAIL_FROM", "hr@example.com")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import intake.models  # noqa: E402, F401
from intake.db.base import Base  # noqa: E402
from intake.infrastructure.document_store import SqlDocumentCollection  # noqa: E402
from intake.models.applicant import Applicant  # noqa: E402
from intake.models.payment import Payment  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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


@pytest.fixture
def applicants(test_db):
    return SqlDocumentCollection(test_db, Applicant)


@pytest.fixture
def payments(test_db):
    return SqlDocumentCollection(test_db, Payment)
