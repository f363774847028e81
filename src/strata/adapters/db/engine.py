"""Database engine factory and helpers.

This module centralizes creation of SQLAlchemy async engines and applies
backend-specific tuning:

- **SQLite** (``sqlite+aiosqlite``): adds connection PRAGMAs to enforce foreign
  keys, enable WAL, and tune durability/temporary storage.
- **Other backends** (``postgresql+asyncpg``): no tuning applied here.

Use this module whenever you need an engine so that all connections are
consistently configured.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import create_async_engine

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite", "sqlite+aiosqlite"}


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite.

    Args:
        url: A database URL string or SQLAlchemy :class:`URL`.

    Returns:
        bool: True if the backend is SQLite, otherwise False.
    """
    u = make_url(str(url))
    return u.get_backend_name() in SQLITE_NAMES


def make_engine(url: str | URL, *, echo: bool = False) -> AsyncEngine:
    """Create a SQLAlchemy :class:`AsyncEngine` for the given URL.

    The URL must name an asyncio driver (``sqlite+aiosqlite://``,
    ``postgresql+asyncpg://``). If the backend is SQLite, applies a set of
    PRAGMAs on every new DBAPI connection:
        - ``foreign_keys=ON`` (enforce referential integrity)
        - ``journal_mode=WAL`` (write-ahead logging for concurrency)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``temp_store=MEMORY`` (reduce temp file I/O)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        AsyncEngine: Configured engine.
    """

    engine = create_async_engine(url, echo=echo)

    if is_sqlite(url):

        @event.listens_for(engine.sync_engine, "connect")
        def _sqlite_pragmas(dbapi_conn: Any, conn_record: Any) -> None:  # pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

    logger.debug(
        "Created async engine for %s",
        make_url(str(url)).render_as_string(hide_password=True),
    )
    return engine
