"""SQLAlchemy-backed EventStore adapter for STRATA.

This module provides an asyncio SQLAlchemy implementation of the EventStore
interface, persisting event records in the ``event_store`` table defined in
``adapters.eventstore.schema``.

Every call acquires its own connection from the engine and releases it
(committed or rolled back) before returning; nothing is held across calls.

Exceptions:
    Maps SQLAlchemy DBAPI errors to ``StoreUnavailableError``, raised from
    the driver error.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError

from strata.adapters.eventstore.event_mapper import EventMapper
from strata.adapters.eventstore.schema import event_store
from strata.interfaces.eventstore import (
    EventRecord,
    EventStore,
    StoreUnavailableError,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from strata.domain.stream import EventStream
    from strata.interfaces.eventstore import EventPublisher

logger = logging.getLogger(__name__)


class SqlAlchemyEventStore(EventStore):
    """SQLAlchemy-backed EventStore.

    - Uses the canonical `event_store` table (see adapters.eventstore.schema).
    - Writes a stream's uncommitted events in one transaction, then publishes them.
    - Loads events ordered by `occurred_on`, then insertion order.

    Args:
        engine: Async engine to draw a connection from on every call.
        event_mapper: Converts between domain events and records.
        publisher: Receives each committed event, in order. None disables
            publication.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        event_mapper: EventMapper | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self.engine = engine
        self.event_mapper = event_mapper if event_mapper is not None else EventMapper()
        self.publisher = publisher

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    async def save_stream(self, stream: EventStream) -> None:
        if not (events := stream.uncommitted):
            logger.debug("Nothing to save for stream %s", stream.aggregate_id)
            return

        records = self.event_mapper.to_records(stream)
        try:
            async with self.engine.begin() as connection:
                await connection.execute(
                    event_store.insert(), [asdict(record) for record in records]
                )
        except DBAPIError as e:
            # any DBAPIErrors (OperationalError, IntegrityError, etc.)
            logger.error(
                "Saving %d event(s) for stream %s failed; rolled back",
                len(records),
                stream.aggregate_id,
            )
            raise StoreUnavailableError(str(e)) from e

        logger.debug(
            "Committed %d event(s) for stream %s", len(records), stream.aggregate_id
        )

        if self.publisher is not None:
            for event in events:
                await self.publisher(event)

    async def load_stream(self, aggregate_id: str) -> EventStream:
        stmt = (
            select(
                event_store.c.aggregate_id,
                event_store.c.event_type,
                event_store.c.event_data,
                event_store.c.occurred_on,
            )
            .where(event_store.c.aggregate_id == aggregate_id)
            .order_by(event_store.c.occurred_on.asc(), event_store.c.global_seq.asc())
        )

        try:
            async with self.engine.connect() as connection:
                rows = (await connection.execute(stmt)).mappings().all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        return self.event_mapper.to_stream(
            aggregate_id, (EventRecord(**row) for row in rows)
        )
