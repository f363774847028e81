"""Defines the SQLAlchemy EventStore adapter package.

This package contains an asyncio SQLAlchemy implementation of the event store,
providing durable storage of events in a relational database (SQLite through
aiosqlite, PostgreSQL through asyncpg).
"""

from .eventstore import SqlAlchemyEventStore

__all__ = ["SqlAlchemyEventStore"]
