"""Database Session Manager — SQLite engine, health check, error mapping."""

import pytest
from sqlalchemy import text

import intake.infrastructure.database as db_module
from intake.core.errors import DatabaseError
from intake.infrastructure.database import DatabaseSessionManager, get_db


@pytest.fixture
async def manager():
    m = DatabaseSessionManager("sqlite+aiosqlite:///:memory:", pool_size=5)
    yield m
    await m.dispose()


async def test_sqlite_engine_ignores_pool_sizing(manager):
    assert await manager.health_check()


async def test_sqlalchemy_errors_become_database_errors(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.to_response() == {"error": "Database operation failed"}
    assert "no_such_table" in exc_info.value.detail


async def test_get_db_requires_initialization(monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    with pytest.raises(DatabaseError):
        async for _ in get_db():
            pass
