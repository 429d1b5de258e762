"""Database Session Manager — rollback/close guarantees and error mapping.

Uses a temporary SQLite file through aiosqlite; nothing PostgreSQL-specific is exercised.
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import InvalidRequestError

from registration_api.core.errors import DatabaseError
from registration_api.infrastructure import database
from registration_api.infrastructure.database import (
    DatabaseSessionManager, get_db_manager, init_db,
)


@pytest.fixture
async def manager(tmp_path):
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    yield mgr
    await mgr.dispose()


async def test_health_check_true_when_reachable(manager):
    assert await manager.health_check() is True


async def test_driver_error_mapped_with_driver_text(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert "no such table: missing_table" in exc_info.value.message
    assert exc_info.value.operation == "execute"


async def test_non_driver_error_mapped_as_session_failure(manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with manager.session():
            raise InvalidRequestError("session is in an invalid state")
    assert exc_info.value.operation == "session"
    assert "session is in an invalid state" in exc_info.value.message


async def test_session_usable_after_error(manager):
    with pytest.raises(DatabaseError):
        async with manager.session() as db:
            await db.execute(text("SELECT nope()"))
    async with manager.session() as db:
        result = await db.execute(text("SELECT 1"))
        assert result.scalar() == 1


async def test_health_check_false_on_failure(manager, monkeypatch):
    class _Unreachable:
        async def __aenter__(self):
            raise DatabaseError("refused", "connect")

        async def __aexit__(self, *exc):
            return False

    monkeypatch.setattr(manager, "session", _Unreachable)
    assert await manager.health_check() is False


def test_get_db_manager_requires_init(monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    with pytest.raises(DatabaseError) as exc_info:
        get_db_manager()
    assert exc_info.value.http_status == 503


async def test_init_db_sets_singleton(monkeypatch, tmp_path):
    monkeypatch.setattr(database, "db_manager", None)
    mgr = init_db(f"sqlite+aiosqlite:///{tmp_path / 'init.db'}", pool_size=2, max_overflow=0)
    try:
        assert get_db_manager() is mgr
    finally:
        await mgr.dispose()
