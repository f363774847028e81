"""Fixtures for black-box CLI tests under `tests/functional/`."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """Undo the logging configuration every CLI invocation installs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner_env(tmp_path: Path) -> dict[str, str]:
    """Environment for CLI runs: no database URL, flight recorder in tmp."""
    return {
        "STRATA_DB_URL": "",
        "STRATA_LOG_PATH": str(tmp_path / "strata.log"),
    }


@pytest.fixture
def runner(runner_env: dict[str, str]) -> CliRunner:
    """A CliRunner without a database URL."""
    return CliRunner(env=runner_env)
