"""Readmodel schema.

Defines the ``readmodels`` table: one row per aggregate id holding the latest
projected readmodel, replaced as a whole on every save.
"""

from __future__ import annotations

from sqlalchemy import Column, Table

from strata.adapters.db.metadata import metadata
from strata.adapters.db.sa_types import AGGREGATE_ID, PORTABLE_JSON, TYPE_TAG

__all__ = ["readmodels"]

readmodels = Table(
    "readmodels",
    metadata,
    Column(
        "aggregate_id",
        AGGREGATE_ID,
        primary_key=True,
        comment="Aggregate the readmodel was projected from.",
    ),
    Column(
        "readmodel_type",
        TYPE_TAG,
        nullable=False,
        comment="Type tag of the stored readmodel.",
    ),
    Column(
        "readmodel_data",
        PORTABLE_JSON,
        nullable=False,
        comment="Encoded readmodel (JSON object).",
    ),
    comment="Projected readmodels, keyed by aggregate id.",
)
