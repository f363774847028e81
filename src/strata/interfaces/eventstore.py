"""Event store interfaces for STRATA.

This module defines:
- The `EventRecord` DTO, the persisted shape of one domain event.
- The `EventStore` port (framework-free ABC) for saving and loading streams.
- The `EventPublisher` protocol the store publishes committed events through.
- A small, adapter-agnostic exception hierarchy.

Layering & dependency rules:
- Lives under `strata.interfaces`. Do NOT import from adapters, bootstrap, or entrypoints.
- Safe to import from service layer and adapters.

Contract overview
-----------------
Save:
- Every uncommitted event of the stream is written in original order, keyed by
  the stream's aggregate id, inside **one** transaction: all rows commit or none do.
- Only after the commit succeeded, each written event is published, in the same
  order, through the store's `EventPublisher`.
- Nothing is published for a transaction that did not commit.
- A failure while publishing propagates to the caller, but the events remain
  durable. There is no outbox and no retry; re-publishing is the caller's concern.
- Storage failures roll back and surface as `StoreUnavailableError`, raised
  `from` the driver error: the original is kept as `__cause__`.
- An event with a field the payload codec cannot encode raises `TypeError`
  before anything is written.

Load:
- Events for one aggregate id ordered by `occurred_on`, ties broken by
  insertion order.
- A record whose `event_type` cannot be resolved is skipped (that record only).
- An unknown aggregate id yields an empty stream, not an error.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from strata.domain.events import DomainEvent
    from strata.domain.stream import EventStream

# pylint: disable=too-few-public-methods

# --- Exceptions to standardize adapter behavior ---


class EventStoreError(Exception):
    """Base class for STRATA event store errors."""


class InvalidRecordError(EventStoreError):
    """The event record is invalid."""


class StoreUnavailableError(EventStoreError):
    """Operational/timeout/connection errors; the transaction was rolled back."""


class UnresolvableTypeError(EventStoreError, LookupError):
    """A stored type tag has no registered type to decode into."""

    def __init__(self, type_tag: str) -> None:
        super().__init__(f"Unknown type tag: {type_tag}")
        self.type_tag = type_tag


# --- Record DTO ---


@dataclass(frozen=True, slots=True)
class EventRecord:
    """Persisted event row: one per domain event, append-only.

    Notes:
      - `event_type` is the tag the event mapper resolves back to a class.
      - `event_data` is the encoded payload (JSON object).
      - `occurred_on` must be UTC, tz-aware.
    """

    aggregate_id: str
    event_type: str
    event_data: dict[str, Any]
    occurred_on: datetime

    def __post_init__(self) -> None:
        if not self.aggregate_id.strip() or not self.event_type.strip():
            raise InvalidRecordError("aggregate_id and event_type must be non-empty.")
        if self.occurred_on.tzinfo is None or self.occurred_on.utcoffset() is None:
            raise InvalidRecordError("occurred_on must be tz-aware.")
        if self.occurred_on.utcoffset() != timedelta(0):
            raise InvalidRecordError("occurred_on must be UTC.")


# --- Publisher ---


class EventPublisher(Protocol):
    """Anything that can deliver a committed domain event to its subscribers."""

    async def __call__(self, event: DomainEvent) -> None: ...


# --- Event Store Interface ---


class EventStore(abc.ABC):
    """An abstract base class for an event store."""

    @abc.abstractmethod
    async def save_stream(self, stream: EventStream) -> None:
        """Persist the stream's uncommitted events atomically, then publish them.

        Args:
            stream: The stream to save. Events before `stream.committed` are
                already durable and are neither written nor published again.

        Raises:
            StoreUnavailableError: The transaction failed and was rolled back;
                nothing was published. The driver error is its `__cause__`.
            TypeError: An event holds a value with no JSON form; nothing was
                written.
            Exception: Whatever a subscriber raised while publishing. The
                events are durable at that point.
        """

    @abc.abstractmethod
    async def load_stream(self, aggregate_id: str) -> EventStream:
        """Load every recorded event of `aggregate_id`, ordered by occurrence.

        Returns:
            The stream with all events committed. Empty if nothing was recorded.

        Raises:
            StoreUnavailableError: For operational/connection errors.
        """
