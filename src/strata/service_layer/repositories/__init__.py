"""Repositories over the event store."""

from .errors import AggregateNotFoundError, RepositoryError
from .event_sourced import AggregateRepository

__all__ = ["AggregateNotFoundError", "AggregateRepository", "RepositoryError"]
