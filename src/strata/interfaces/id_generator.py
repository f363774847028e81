"""Port for generating aggregate identifiers."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for a source of new aggregate ids.

    Ids are opaque strings; the event store and readmodel tables store them as
    they are given.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return an id that has never been returned before."""
