"""Unit tests for the database engine helpers."""

from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import make_url

from strata.adapters.db.engine import is_sqlite, make_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

# pylint: disable=magic-value-comparison


def test_is_sqlite_true_for_sqlite_urls():
    """is_sqlite() recognizes every SQLite driver."""
    assert is_sqlite("sqlite:///:memory:")
    assert is_sqlite("sqlite+aiosqlite:///file.db")
    assert is_sqlite(make_url("sqlite+pysqlite:///file.db"))


def test_is_sqlite_false_for_postgres_url():
    """is_sqlite() is False for PostgreSQL."""
    assert not is_sqlite("postgresql+asyncpg://u:p@localhost/db")


def test_make_engine_is_async_and_lazy(tmp_path):
    """make_engine() builds an AsyncEngine without connecting."""
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'lazy.db'}")
    assert engine.dialect.name == "sqlite"
    assert engine.url.drivername == "sqlite+aiosqlite"
    assert not (tmp_path / "lazy.db").exists()


@pytest.mark.asyncio
async def test_sqlite_pragmas_applied(sqlite_engine: "AsyncEngine"):
    """SQLite connections get the expected PRAGMAs."""
    async with sqlite_engine.connect() as conn:
        fk = (await conn.exec_driver_sql("PRAGMA foreign_keys;")).scalar()
        jm = (await conn.exec_driver_sql("PRAGMA journal_mode;")).scalar()
        sync = (await conn.exec_driver_sql("PRAGMA synchronous;")).scalar()
        tmp = (await conn.exec_driver_sql("PRAGMA temp_store;")).scalar()
    assert fk == 1
    assert jm.lower() == "wal"
    assert sync == 1
    assert tmp == 2
