"""Pytest fixtures for ReadmodelRepository contract tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio

from strata.adapters.readmodels.in_memory_adapters import InMemoryReadmodelRepository
from strata.adapters.readmodels.sqlalchemy_adapters import (
    SqlAlchemyReadmodelRepository,
)
from strata.interfaces.readmodels import ReadmodelRepository
from tests.fixtures.sqlite import migrated_engine


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def readmodels(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncIterator[ReadmodelRepository]:
    """Every ReadmodelRepository adapter."""
    if request.param == "memory":
        yield InMemoryReadmodelRepository()
        return

    engine = await migrated_engine(tmp_path / "contract.db")
    try:
        yield SqlAlchemyReadmodelRepository(engine)
    finally:
        await engine.dispose()
