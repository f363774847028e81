"""Event store schema.

Defines the append-only ``event_store`` table used by STRATA to persist domain
events. Each row is a single event of one aggregate, with a global insertion
sequence and a UTC occurrence timestamp.

| Column       | Purpose                                              |
|--------------|------------------------------------------------------|
| global_seq   | insertion order; breaks ties between equal timestamps |
| aggregate_id | owning aggregate                                     |
| event_type   | type tag resolved by the event mapper on load        |
| event_data   | encoded payload (JSON object)                        |
| occurred_on  | ordering timestamp (UTC)                             |

Append-only enforcement (UPDATE/DELETE triggers) is applied in migrations.
"""

from __future__ import annotations

from sqlalchemy import Column, Identity, Index, Table

from strata.adapters.db.metadata import metadata
from strata.adapters.db.sa_types import (
    AGGREGATE_ID,
    BIGINT_PK,
    PORTABLE_JSON,
    TYPE_TAG,
    UTCDateTime,
)

__all__ = ["event_store"]

event_store = Table(
    "event_store",
    metadata,
    Column(
        "global_seq",
        BIGINT_PK,
        Identity(start=1),
        nullable=False,
        primary_key=True,
        comment="Global, monotonically increasing insertion sequence.",
    ),
    Column(
        "aggregate_id",
        AGGREGATE_ID,
        nullable=False,
        comment="Identity of the aggregate the event belongs to.",
    ),
    Column(
        "event_type",
        TYPE_TAG,
        nullable=False,
        comment="Type tag used to decode the payload.",
    ),
    Column(
        "event_data",
        PORTABLE_JSON,
        nullable=False,
        comment="Encoded domain event payload (JSON object).",
    ),
    Column(
        "occurred_on",
        UTCDateTime(),
        nullable=False,
        comment="UTC time the event was recorded; primary ordering key.",
    ),
    Index(None, "aggregate_id", "occurred_on", "global_seq"),
    comment="Append-only event log. One row per domain event.",
)
