"""Functional tests for the top-level ``strata`` command: help, version, logging."""

from __future__ import annotations

import re
from pathlib import Path
from textwrap import dedent

from click.testing import CliRunner

from strata import __version__
from strata.entrypoints.cli import main

# pylint: disable=magic-value-comparison

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _normalize(s: str) -> str:
    """Collapse whitespace so wrapped help text can be compared."""
    return re.sub(r"\s+", " ", s.strip())


def test_help_lists_help_text_and_commands(runner: CliRunner):
    """`--help` renders the HELP prose and the db group."""
    result = runner.invoke(main.strata, ["--help"])
    assert result.exit_code == 0, result.output

    text = ANSI_RE.sub("", result.output)
    assert _normalize(dedent(main.HELP)) in _normalize(text)
    assert "Usage:" in text
    assert "Commands:" in text
    assert "db" in text


def test_db_help(runner: CliRunner):
    """`db --help` lists the forward-only commands."""
    result = runner.invoke(main.strata, ["db", "--help"])
    text = ANSI_RE.sub("", result.output)
    assert result.exit_code == 0, result.output
    for command in ("upgrade", "current", "heads", "status"):
        assert command in text
    assert "downgrade" not in text


def test_version(runner: CliRunner):
    """`--version` prints the package version."""
    result = runner.invoke(main.strata, ["--version"])
    assert result.exit_code == 0, result.output
    assert __version__ in ANSI_RE.sub("", result.output)


def test_bad_logger_level_is_a_usage_error(runner: CliRunner):
    """An unparsable -L value is rejected by Click."""
    result = runner.invoke(main.strata, ["-L", "sqlalchemy=LOUD", "db", "heads"])
    assert result.exit_code == 2
    assert "Invalid log level" in result.output


def test_force_flush_writes_the_flight_recorder(
    runner: CliRunner, runner_env: dict[str, str]
):
    """With --force-flush, buffered records reach --log-path on exit."""
    result = runner.invoke(main.strata, ["--force-flush", "db", "heads"])
    assert result.exit_code == 0, result.output

    log = Path(runner_env["STRATA_LOG_PATH"]).read_text(encoding="utf-8")
    assert f"STRATA {__version__}" in log
