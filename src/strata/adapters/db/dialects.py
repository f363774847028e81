"""The database backends STRATA runs on.

Upserts (``INSERT ... ON CONFLICT DO UPDATE``) are spelled the same way on
SQLite and PostgreSQL, but SQLAlchemy only offers them through each
dialect's own ``insert``; `DialectName.insert` picks the right one.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects import postgresql, sqlite

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

_ALIASES = {
    "pg": "postgresql",
    "postgres": "postgresql",
    "postgresql": "postgresql",
    "sqlite": "sqlite",
}


class UnsupportedDialect(Exception):
    """The backend is neither SQLite nor PostgreSQL."""


class DialectName(str, Enum):
    """A supported backend, valued by its SQLAlchemy dialect name."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, name: str) -> DialectName:
        """Parse a dialect name, tolerating aliases and a ``+driver`` suffix.

        ``"postgres"``, ``"postgresql+asyncpg"`` and ``"sqlite+aiosqlite"``
        are all accepted.
        """
        backend = (name or "").strip().lower().partition("+")[0]
        try:
            return cls(_ALIASES[backend])
        except KeyError:
            raise UnsupportedDialect(f"Unsupported dialect: {name!r}") from None

    @classmethod
    def from_sqlalchemy(
        cls, bind: Engine | Connection | AsyncEngine | AsyncConnection
    ) -> DialectName:
        """The backend behind a sync or async engine or connection."""
        dialect = getattr(bind, "dialect", None)
        if dialect is None:
            raise UnsupportedDialect(
                f"{type(bind).__name__} has no SQLAlchemy dialect"
            )
        return cls.from_string(dialect.name)

    def insert(self, table: Table) -> sqlite.Insert | postgresql.Insert:
        """An ``INSERT`` into `table` that supports ``on_conflict_do_update``."""
        if self is DialectName.POSTGRES:
            return postgresql.insert(table)
        return sqlite.insert(table)
