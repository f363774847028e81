"""Global pytest fixtures and hooks for STRATA."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.sqlite",
]

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()

# top-level test directory -> default mark
DEFAULT_MARKS = {
    "unit": pytest.mark.unit,
    "integration": pytest.mark.integration,
    "contract": pytest.mark.contract,
    "functional": pytest.mark.functional,
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark items by the test directory they live in, unless already marked."""
    for item in items:
        try:
            top = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if (mark := DEFAULT_MARKS.get(top)) is None:
            continue
        if not any(m.name == mark.name for m in item.iter_markers()):
            item.add_marker(mark)


@pytest.fixture(autouse=True)
def _no_db_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's STRATA_DB_URL from leaking into tests."""
    monkeypatch.delenv("STRATA_DB_URL", raising=False)
