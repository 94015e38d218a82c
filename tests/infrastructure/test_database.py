"""Database Session Manager — schema creation and parity with the alembic migration."""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import text

from authsession.core.errors import TokenStorageError
from authsession.infrastructure.database import DatabaseSessionManager

MIGRATION = Path(__file__).resolve().parents[2] / "alembic" / "versions" / "001_auth_slots.py"


def _load_migration():
    spec = importlib.util.spec_from_file_location("migration_001_auth_slots", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


async def _table_info(db: DatabaseSessionManager) -> list[tuple]:
    async with db.session() as session:
        result = await session.execute(text("PRAGMA table_info(auth_slots)"))
        return [tuple(row) for row in result]


async def test_create_schema_is_idempotent(db):
    await db.create_schema()
    assert [row[1] for row in await _table_info(db)] == ["key", "value", "updated_at"]


async def test_create_schema_on_unreachable_database_raises(tmp_path):
    db = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}")
    try:
        with pytest.raises(TokenStorageError) as exc_info:
            await db.create_schema()
        assert exc_info.value.action == "create_schema"
    finally:
        await db.dispose()


async def test_create_schema_matches_migration(db, tmp_path):
    migration = _load_migration()
    migrated = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'migrated.db'}")

    def upgrade(conn):
        with Operations.context(MigrationContext.configure(conn)):
            migration.upgrade()

    try:
        async with migrated.engine.begin() as conn:
            await conn.run_sync(upgrade)
        assert await _table_info(migrated) == await _table_info(db)
    finally:
        await migrated.dispose()


async def test_updated_at_filled_by_database_default(db):
    async with db.session() as session:
        await session.execute(
            text("INSERT INTO auth_slots (\"key\", value) VALUES ('token', 'T')")
        )
        await session.commit()
        result = await session.execute(
            text("SELECT updated_at FROM auth_slots WHERE \"key\" = 'token'")
        )
        assert result.scalar_one() is not None
