"""STRATA CLI entry point.

Defines the top-level ``strata`` command (via Click-Extra), configures logging
for every subcommand, and registers the subcommand groups.

Currently available groups
- ``strata db``: forward-only schema management (upgrade/current/heads/status).

Examples
    $ strata --version
    $ strata -vv db status
    $ strata -L sqlalchemy.engine=INFO db upgrade --force
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from strata import __version__
from strata.logging import configure_logging, console_level, log_startup

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """STRATA command-line interface.

    STRATA stores application state as append-only streams of domain events,
    projects them into readmodels, and dispatches commands, queries and events
    through a message bus. The CLI manages the database that backs it.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Raise console verbosity one level above WARNING per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity one level below WARNING per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Show locals and full paths in console tracebacks.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("strata", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="STRATA_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="STRATA_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N records at DEBUG in memory and write them to "
        "--log-path when a WARNING or worse is logged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum level of a logger (NAME=LEVEL). Applies to the console "
        "and the flight recorder. Repeatable, or set STRATA_LOGGER_LEVELS "
        "to a comma/space separated list."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def strata(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """STRATA command-line interface."""
    level = console_level(verbose_count, quiet_count)
    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,
        log_path=log_path if flight_recorder else None,
        recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


strata.add_command(db_group)
