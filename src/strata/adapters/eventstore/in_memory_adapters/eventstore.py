"""In memory event store implementation.

All events are stored in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.

This implementation passes all contract tests for the EventStore interface.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from strata.adapters.eventstore.event_mapper import EventMapper
from strata.interfaces.eventstore import EventRecord, EventStore

if TYPE_CHECKING:
    from strata.domain.stream import EventStream
    from strata.interfaces.eventstore import EventPublisher

logger = logging.getLogger(__name__)


class InMemoryEventStore(EventStore):
    """In-memory EventStore for testing and non-durable use cases.

    - Non-durable: all data is lost when the instance is discarded.
    - Records are still encoded, so payloads go through the same codec as
      the SQLAlchemy adapter.
    - A save is staged completely before any record becomes visible.
    """

    def __init__(
        self,
        event_mapper: EventMapper | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self.event_mapper = event_mapper if event_mapper is not None else EventMapper()
        self.publisher = publisher
        self._records: list[tuple[int, EventRecord]] = []
        self._global_seq = itertools.count(1)

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    async def save_stream(self, stream: EventStream) -> None:
        if not (events := stream.uncommitted):
            logger.debug("Nothing to save for stream %s", stream.aggregate_id)
            return

        staged = [
            (next(self._global_seq), record)
            for record in self.event_mapper.to_records(stream)
        ]
        self._records.extend(staged)
        logger.debug(
            "Committed %d event(s) for stream %s", len(staged), stream.aggregate_id
        )

        if self.publisher is not None:
            for event in events:
                await self.publisher(event)

    async def load_stream(self, aggregate_id: str) -> EventStream:
        ordered = sorted(
            (
                (record.occurred_on, seq, record)
                for seq, record in self._records
                if record.aggregate_id == aggregate_id
            ),
            key=lambda item: item[:2],
        )
        return self.event_mapper.to_stream(
            aggregate_id, (record for _, _, record in ordered)
        )

    # --------------------------------------------------------------------- #
    # Inspection
    # --------------------------------------------------------------------- #

    @property
    def records(self) -> list[EventRecord]:
        """All records in insertion order (a copy)."""
        return [record for _, record in self._records]
