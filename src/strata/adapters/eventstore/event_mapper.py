"""Conversions between DomainEvents and EventRecords."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from strata.adapters.codec import (
    build_registry,
    decode_payload,
    encode_payload,
    type_tag,
)
from strata.domain.stream import EventStream
from strata.interfaces.eventstore import (
    EventRecord,
    InvalidRecordError,
    UnresolvableTypeError,
)

if TYPE_CHECKING:
    from strata.domain.events import DomainEvent

logger = logging.getLogger(__name__)


class EventMapper:
    """Maps between DomainEvents and EventRecords.

    Args:
        event_registry: Tag -> event class mapping, or an iterable of event
            classes to build one from. Only registered events can be decoded.
    """

    def __init__(
        self,
        event_registry: Mapping[str, type[DomainEvent]]
        | Iterable[type[DomainEvent]] = (),
    ) -> None:
        self.event_registry: dict[str, type[DomainEvent]] = (
            dict(event_registry)
            if isinstance(event_registry, Mapping)
            else build_registry(event_registry)
        )

    @staticmethod
    def to_record(
        aggregate_id: str,
        event: DomainEvent,
        occurred_on: datetime | None = None,
    ) -> EventRecord:
        """Convert a DomainEvent to an EventRecord."""
        return EventRecord(
            aggregate_id=aggregate_id,
            event_type=type_tag(event),
            event_data=encode_payload(event),
            occurred_on=occurred_on or datetime.now(timezone.utc),
        )

    def to_domain_event(self, record: EventRecord) -> DomainEvent:
        """Convert an EventRecord back to a DomainEvent.

        Raises:
            UnresolvableTypeError: If the record's type tag is not registered.
        """
        if not (cls := self.event_registry.get(record.event_type)):
            raise UnresolvableTypeError(record.event_type)
        return decode_payload(cls, record.event_data)

    def to_records(
        self, stream: EventStream, occurred_on: datetime | None = None
    ) -> list[EventRecord]:
        """Convert the uncommitted events of `stream` to records sharing one timestamp.

        Raises:
            InvalidRecordError: If an event belongs to another aggregate.
        """
        occurred_on = occurred_on or datetime.now(timezone.utc)
        records = []
        for event in stream.uncommitted:
            if event.aggregate_id != stream.aggregate_id:
                raise InvalidRecordError(
                    f"Event {type(event).__name__} belongs to aggregate "
                    f"{event.aggregate_id!r}, not {stream.aggregate_id!r}."
                )
            records.append(self.to_record(stream.aggregate_id, event, occurred_on))
        return records

    def to_stream(
        self, aggregate_id: str, records: Iterable[EventRecord]
    ) -> EventStream:
        """Decode loaded records, already in order, into a fully committed stream.

        Records whose type tag cannot be resolved are skipped and logged; the
        rest of the stream still loads.
        """
        events: list[DomainEvent] = []
        for record in records:
            try:
                events.append(self.to_domain_event(record))
            except UnresolvableTypeError:
                logger.warning(
                    "Skipping event of unknown type %s in stream %s",
                    record.event_type,
                    aggregate_id,
                )
        return EventStream(aggregate_id, tuple(events), committed=len(events))
