"""Event streams.

An `EventStream` is the ordered history of one aggregate. It is a value:
`append` returns a new stream and replays are pure folds over its events.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import reduce
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from strata.domain.aggregates import AggregateRoot
    from strata.domain.events import DomainEvent

T = TypeVar("T")
A = TypeVar("A", bound="AggregateRoot")


@dataclass(frozen=True, slots=True)
class EventStream:
    """Ordered events of a single aggregate.

    Attributes:
        aggregate_id: The aggregate this stream belongs to.
        events: Events in order of occurrence.
        committed: Number of leading events already durable in an event store.
            Streams built with `create()` start at 0; `EventStore.load_stream`
            returns streams where every event is committed.
    """

    aggregate_id: str
    events: tuple[DomainEvent, ...] = ()
    committed: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.committed <= len(self.events):
            raise ValueError("committed must be between 0 and the number of events")

    @classmethod
    def create(cls, aggregate_id: str) -> EventStream:
        """Return an empty stream for `aggregate_id`."""
        return cls(aggregate_id=aggregate_id)

    def append(self, new_events: Iterable[DomainEvent]) -> EventStream:
        """Return a new stream with `new_events` after the current ones."""
        return replace(self, events=(*self.events, *new_events))

    @property
    def uncommitted(self) -> tuple[DomainEvent, ...]:
        """Events appended since the stream was loaded (or all, for a new stream)."""
        return self.events[self.committed :]

    def replay(self, initial: T, apply: Callable[[T, DomainEvent], T]) -> T:
        """Left fold `apply` over the events, starting from `initial`."""
        return reduce(apply, self.events, initial)

    def replay_as(self, aggregate_cls: type[A]) -> A:
        """Rebuild an aggregate of type `aggregate_cls` from this stream.

        The fold is seeded with `aggregate_cls.empty()` and the result carries
        no uncommitted events.
        """
        return aggregate_cls.load_from_history(self.events)
