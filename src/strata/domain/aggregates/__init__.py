"""Aggregates package.

Concrete aggregates inherit from the base `AggregateRoot` class in `base.py`,
which is re-exported here to provide a single, convenient import path.
"""

from .base import AggregateRoot

__all__ = ["AggregateRoot"]
