"""Events"""

import abc
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.

    A domain event is an immutable fact about one aggregate. It has no identity
    of its own: it is identified by the aggregate it belongs to and its position
    in that aggregate's stream. Concrete events declare their payload as
    dataclass fields and tell which aggregate they belong to.
    """

    @property
    @abc.abstractmethod
    def aggregate_id(self) -> str:
        """Return the ID of the aggregate this event belongs to."""
