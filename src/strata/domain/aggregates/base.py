"""Base class for all aggregates."""

import abc
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TypeVar

from strata.domain.events import DomainEvent

A = TypeVar("A", bound="AggregateRoot")


@dataclass(frozen=True, kw_only=True)
class AggregateRoot(abc.ABC):
    """Generic base class for all aggregates.

    Aggregates are immutable values. Their state is only ever the result of
    folding domain events over the zero value returned by `empty()`; every
    operation returns a new instance and leaves the receiver untouched.

    Concrete aggregates are frozen dataclasses that implement `empty()` and
    `apply()`, plus domain operations that call `add_domain_event()`.
    """

    id: str = ""
    uncommitted_events: tuple[DomainEvent, ...] = field(default=(), repr=False)

    # --- Construction Paths ---

    @classmethod
    @abc.abstractmethod
    def empty(cls: type[A]) -> A:
        """Return the zero value of the aggregate, the seed of every replay."""

    @classmethod
    def load_from_history(cls: type[A], history: Iterable[DomainEvent]) -> A:
        """Rebuild an aggregate from its past events.

        Args:
            history: Events to apply, in order of occurrence.

        Returns:
            The aggregate folded from `empty()`, with no uncommitted events.
        """
        aggregate = cls.empty()
        for event in history:
            aggregate = aggregate.apply(event)
        return replace(aggregate, uncommitted_events=())

    # --- Event Application ---

    @abc.abstractmethod
    def apply(self: A, event: DomainEvent) -> A:
        """Return the state that results from applying `event` to this state.

        Must be pure and deterministic. Events the aggregate does not know
        about must return `self` unchanged, so that histories written by newer
        producers can still be replayed.
        """

    def add_domain_event(self: A, event: DomainEvent) -> A:
        """Apply `event` and stage it as uncommitted, in a single new value."""
        updated = self.apply(event)
        return replace(
            updated, uncommitted_events=(*updated.uncommitted_events, event)
        )

    # --- Plumbing ---

    def mark_committed(self: A) -> A:
        """Return the same state with no uncommitted events."""
        return replace(self, uncommitted_events=())
