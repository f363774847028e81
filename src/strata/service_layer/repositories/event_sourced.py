"""Module for event-sourced repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from strata.domain.stream import EventStream

from .errors import AggregateNotFoundError

if TYPE_CHECKING:
    from strata.domain.aggregates import AggregateRoot
    from strata.interfaces.eventstore import EventStore

# pylint: disable=too-few-public-methods

A = TypeVar("A", bound="AggregateRoot")


class AggregateRepository(Generic[A]):
    """Loads and saves aggregates of one type through an event store.

    Args:
        event_store: Store holding the aggregates' streams.
        aggregate_cls: Concrete aggregate type to rebuild on load.
    """

    def __init__(self, event_store: EventStore, aggregate_cls: type[A]) -> None:
        self.event_store = event_store
        self.aggregate_cls = aggregate_cls

    # --- Loads ---

    async def load(self, aggregate_id: str) -> A:
        """Rebuild an aggregate from its stream.

        Raises:
            AggregateNotFoundError: If the stream has no events.
        """
        stream = await self.event_store.load_stream(aggregate_id)
        if not stream.events:
            raise AggregateNotFoundError(
                aggregate_type_name=self.aggregate_cls.__name__,
                aggregate_id=aggregate_id,
            )
        return stream.replay_as(self.aggregate_cls)

    # --- Saves ---

    async def save(self, aggregate: A) -> A:
        """Persist the aggregate's uncommitted events.

        Returns:
            The aggregate with its uncommitted events cleared.
        """
        stream = EventStream.create(aggregate.id).append(aggregate.uncommitted_events)
        await self.event_store.save_stream(stream)
        return aggregate.mark_committed()
