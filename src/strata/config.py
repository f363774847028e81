"""Runtime configuration: where the database lives and where migrations are.

STRATA reads a single setting from the environment, the async SQLAlchemy
URL in ``STRATA_DB_URL``. Everything Alembic needs is derived from it.
"""

import os
import sys
from collections.abc import Mapping
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "STRATA_DB_URL"  # pragma: no mutate
MIGRATIONS_PACKAGE = "strata.adapters.db.alembic"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """No database URL was given and ``STRATA_DB_URL`` is empty or unset."""


def get_db_url(environ: Mapping[str, str] | None = None) -> str:
    """Return ``STRATA_DB_URL`` from `environ` (``os.environ`` by default).

    Raises:
        DatabaseUrlNotSetError: if the variable is missing or blank.
    """
    url = (os.environ if environ is None else environ).get(DB_URL_ENV_VAR, "")
    if not url.strip():
        raise DatabaseUrlNotSetError
    return url


def migrations_location() -> str:
    """Filesystem path of the packaged Alembic scripts."""
    return str(files(MIGRATIONS_PACKAGE))


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Alembic `Config` for STRATA's migrations, with no ini file behind it.

    `db_url` may be left out for commands that only read the scripts
    (``heads``, ``history``). Alembic prints its status lines to `stdout`.
    """
    options = {"script_location": migrations_location()}
    if db_url is not None:
        options["sqlalchemy.url"] = db_url

    cfg = Config(stdout=stdout)
    for key, value in options.items():
        cfg.set_main_option(key, value)
    return cfg
