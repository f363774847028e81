"""Packaged Alembic migration scripts for STRATA (see ``strata.config``)."""
