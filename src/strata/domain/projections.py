"""Projections and readmodels.

A projection folds an aggregate's event stream into a denormalized readmodel.
Readmodels are stored apart from the event log (see
`strata.interfaces.readmodels`) and may lag behind it.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from strata.domain.errors import AggregateIdMismatchError

if TYPE_CHECKING:
    from strata.domain.events import DomainEvent
    from strata.domain.stream import EventStream


@dataclass(frozen=True)
class Readmodel:
    """Base class for readmodels.

    Concrete readmodels are frozen dataclasses whose `id` is the id of the
    aggregate they were projected from.
    """

    id: str


R = TypeVar("R", bound=Readmodel)


class Projection(abc.ABC, Generic[R]):
    """Fold of an event stream into a readmodel of type `R`.

    Subclasses implement `evolve()`; `project()` drives the fold.
    """

    def __init__(self, stream: EventStream) -> None:
        self.stream = stream

    def project(self, aggregate_id: str) -> R | None:
        """Project the stream into a readmodel.

        Args:
            aggregate_id: The aggregate to project; must be the stream's own.

        Returns:
            The readmodel after every event has been folded, or None when no
            event in the stream created one.

        Raises:
            AggregateIdMismatchError: If `aggregate_id` is not the stream's.
        """
        if aggregate_id != self.stream.aggregate_id:
            raise AggregateIdMismatchError(self.stream.aggregate_id, aggregate_id)
        return self.stream.replay(None, self.evolve)

    @abc.abstractmethod
    def evolve(self, readmodel: R | None, event: DomainEvent) -> R | None:
        """Fold one event into the readmodel.

        Creating events return a new readmodel. Updating events return
        `readmodel` unchanged while it is still None. Unknown events return
        `readmodel` unchanged.
        """
