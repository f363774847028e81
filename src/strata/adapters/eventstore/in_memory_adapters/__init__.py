"""Defines the in-memory event store adapter package.

The in-memory event store is suitable for testing, prototyping, and scenarios
where durability is not a concern. Events are lost when the instance is
discarded.
"""

from .eventstore import InMemoryEventStore

__all__ = ["InMemoryEventStore"]
