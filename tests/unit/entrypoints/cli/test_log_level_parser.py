"""Unit tests for the CLI log level parser.

These tests exercise strata.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering default behavior, override semantics, input normalization (commas/spaces),
case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from strata.entrypoints.cli.helpers.log_level_parser import (
    DEFAULT_LIB_LEVELS,
    parse_log_level,
)


def make_ctx():
    """Create a minimal Click context stub (the callback ignores it)."""
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """When no levels are provided, return the default library logger levels."""
    assert parse_log_level(make_ctx(), None, ()) == {
        "sqlalchemy": logging.WARNING,
        "alembic": logging.WARNING,
        "aiosqlite": logging.WARNING,
        "asyncio": logging.WARNING,
    }


def test_defaults_are_not_mutated():
    """Overrides go into a copy of the defaults."""
    parse_log_level(make_ctx(), None, ("sqlalchemy=DEBUG",))
    assert DEFAULT_LIB_LEVELS["sqlalchemy"] == logging.WARNING


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("sqlalchemy=INFO", "alembic=ERROR", "sqlalchemy=WARNING")
    out = parse_log_level(make_ctx(), None, value)
    assert out["sqlalchemy"] == logging.WARNING
    assert out["alembic"] == logging.ERROR


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    value = "sqlalchemy=INFO,  strata.service_layer=DEBUG alembic=ERROR"
    out = parse_log_level(make_ctx(), None, value)
    assert out["sqlalchemy"] == logging.INFO
    assert out["alembic"] == logging.ERROR
    assert out["strata.service_layer"] == logging.DEBUG


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("sqlalchemy=info", "alembic=WaRnInG"))
    assert out["sqlalchemy"] == logging.INFO
    assert out["alembic"] == logging.WARNING


@pytest.mark.parametrize("item", ["not-a-pair", "=DEBUG", "sqlalchemy=LOUD"])
def test_malformed_items_raise(item):
    """Malformed pairs and unknown levels raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(make_ctx(), None, (item,))
