"""Logging setup for STRATA entrypoints.

Library modules never install handlers; each one only creates its own logger
with ``logging.getLogger(__name__)``. An entrypoint calls `configure_logging`
once, which installs on the root logger:

- a Rich console handler on stderr, filtered by the requested verbosity;
- optionally a *flight recorder*: a `MemoryHandler` that keeps the most recent
  records at every level and only writes them to a file once a WARNING (or
  worse) is logged, or on shutdown when asked to.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib import metadata
from logging.handlers import MemoryHandler
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

PROJECT_PREFIX = "strata"

# distributions whose versions are worth a line in a bug report
DIAGNOSTIC_DISTRIBUTIONS = ("sqlalchemy", "alembic", "aiosqlite", "asyncpg")

RECORDER_FORMAT = (
    "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d "
    "[%(process)d:%(threadName)s] %(message)s"
)


class ThirdPartyPrefixFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Set ``record.prefix`` to ``[package]`` for records from other packages.

    STRATA's own records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        package = record.name.partition(".")[0]
        record.prefix = "" if package == PROJECT_PREFIX else f"[{package}]"
        return True


def console_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """Map ``-v``/``-q`` counts to a level, one step per flag around WARNING."""
    level = logging.WARNING + 10 * (quiet_count - verbose_count)
    return min(max(level, logging.DEBUG), logging.CRITICAL)


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Debug mode shows everything, with timestamps, logger names and source
    links. Otherwise records are shown at `level` and above, third-party ones
    tagged with their package name.
    """
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(stderr=True, color_system="auto" if color else None),
        rich_tracebacks=True,
        tracebacks_show_locals=debug_mode,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a flight recorder writing to `path`.

    Up to `capacity` records are buffered. The buffer is written to `path`
    (truncated when the recorder is created) when a record at `flush_level`
    arrives, when it is full, and on close if `flush_on_close` is set.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=target,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    *,
    level: int,
    debug_mode: bool = False,
    color: bool = True,
    log_path: Path | None = None,
    recorder_capacity: int = 2000,
    force_flush: bool = False,
    logger_levels: Mapping[str, int] | None = None,
) -> list[logging.Handler]:
    """Install the console handler (and the flight recorder, given a path).

    The root logger is opened up to DEBUG; the handlers do the filtering.
    `logger_levels` then raises or lowers individual loggers, which affects
    both handlers.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]
    if log_path is not None:
        handlers.append(
            config_flight_recorder(
                log_path, capacity=recorder_capacity, flush_on_close=force_flush
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level)
    return handlers


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def log_startup(
    logger: logging.Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    logger_levels: Mapping[str, int] | None = None,
) -> None:
    """Log a one-line INFO summary, then DEBUG diagnostics for bug reports."""
    recorders = [h for h in handlers if isinstance(h, MemoryHandler)]
    logger.info(
        "STRATA %s (console=%s, flight-recorder=%s)",
        app_version,
        logging.getLevelName(level),
        "ON" if recorders else "OFF",
    )

    logger.debug(
        "Python %s on %s %s",
        platform.python_version(),
        sys.platform,
        platform.release(),
    )
    logger.debug("PID %s, CWD %s", os.getpid(), os.getcwd())
    for name in DIAGNOSTIC_DISTRIBUTIONS:
        logger.debug("%s %s", name, _distribution_version(name))
    for recorder in recorders:
        logger.debug(
            "Flight recorder: %s (capacity=%d, flush_on_close=%s)",
            getattr(recorder.target, "baseFilename", "<no file>"),
            recorder.capacity,
            recorder.flushOnClose,
        )
    levels = {
        name: logging.getLevelName(lvl) for name, lvl in (logger_levels or {}).items()
    }
    logger.debug("Logger levels: %s", levels or "<defaults>")
