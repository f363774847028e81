"""Custom SQLAlchemy column types for STRATA.

Backend-aware types shared by the event store and readmodel tables and by the
Alembic migrations.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, BigInteger, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import DateTime, TypeDecorator

from strata.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["AGGREGATE_ID", "BIGINT_PK", "PORTABLE_JSON", "TYPE_TAG", "UTCDateTime"]

# SQLite only autoincrements INTEGER PRIMARY KEY (rowid alias)
BIGINT_PK = BigInteger().with_variant(Integer(), "sqlite")

PORTABLE_JSON = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)

AGGREGATE_ID = String(200)
TYPE_TAG = String(200)


def _as_utc(value: datetime) -> datetime:
    """Aware UTC copy of `value`; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """A timestamp that always round-trips as an aware UTC ``datetime``.

    PostgreSQL stores ``timestamptz``. SQLite has no zone support, so values
    are written there as naive UTC and re-declared UTC when read.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    @property
    def python_type(self) -> type[datetime]:
        return datetime

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        value = _as_utc(value)
        if dialect.name == DialectName.SQLITE.value:
            return value.replace(tzinfo=None)
        return value

    process_literal_param = process_bind_param

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        # SQLite drivers may hand back an ISO string instead of a datetime
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        return _as_utc(value) if isinstance(value, datetime) else value
