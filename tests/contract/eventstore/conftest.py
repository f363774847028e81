"""Pytest fixtures for EventStore contract tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio

from strata.adapters.eventstore.event_mapper import EventMapper
from strata.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from strata.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from strata.interfaces.eventstore import EventStore
from tests.fixtures.sqlite import migrated_engine
from tests.helpers.example_domain import EXAMPLE_EVENTS


@pytest.fixture
def published() -> list:
    """Events the store under test published, in order."""
    return []


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def event_store(
    request: pytest.FixtureRequest, tmp_path: Path, published: list
) -> AsyncIterator[EventStore]:
    """Every EventStore adapter, wired to record what it publishes."""

    async def record(event) -> None:
        published.append(event)

    mapper = EventMapper(EXAMPLE_EVENTS)
    if request.param == "memory":
        yield InMemoryEventStore(mapper, publisher=record)
        return

    engine = await migrated_engine(tmp_path / "contract.db")
    try:
        yield SqlAlchemyEventStore(engine, mapper, publisher=record)
    finally:
        await engine.dispose()
