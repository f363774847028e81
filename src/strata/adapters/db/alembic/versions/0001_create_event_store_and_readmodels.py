"""Create event_store and readmodels tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from strata.adapters.db.sa_types import (
    AGGREGATE_ID,
    BIGINT_PK,
    PORTABLE_JSON,
    TYPE_TAG,
    UTCDateTime,
)

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    dialect = op.get_context().dialect.name

    op.create_table(
        "event_store",
        sa.Column(
            "global_seq",
            BIGINT_PK,
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Global, monotonically increasing insertion sequence.",
        ),
        sa.Column(
            "aggregate_id",
            AGGREGATE_ID,
            nullable=False,
            comment="Identity of the aggregate the event belongs to.",
        ),
        sa.Column(
            "event_type",
            TYPE_TAG,
            nullable=False,
            comment="Type tag used to decode the payload.",
        ),
        sa.Column(
            "event_data",
            PORTABLE_JSON,
            nullable=False,
            comment="Encoded domain event payload (JSON object).",
        ),
        sa.Column(
            "occurred_on",
            UTCDateTime(),
            nullable=False,
            comment="UTC time the event was recorded; primary ordering key.",
        ),
        sa.PrimaryKeyConstraint("global_seq", name=op.f("pk_event_store")),
        comment="Append-only event log. One row per domain event.",
    )
    op.create_index(
        op.f("ix_event_store_aggregate_id_occurred_on_global_seq"),
        "event_store",
        ["aggregate_id", "occurred_on", "global_seq"],
        unique=False,
    )

    op.create_table(
        "readmodels",
        sa.Column(
            "aggregate_id",
            AGGREGATE_ID,
            nullable=False,
            comment="Aggregate the readmodel was projected from.",
        ),
        sa.Column(
            "readmodel_type",
            TYPE_TAG,
            nullable=False,
            comment="Type tag of the stored readmodel.",
        ),
        sa.Column(
            "readmodel_data",
            PORTABLE_JSON,
            nullable=False,
            comment="Encoded readmodel (JSON object).",
        ),
        sa.PrimaryKeyConstraint("aggregate_id", name=op.f("pk_readmodels")),
        comment="Projected readmodels, keyed by aggregate id.",
    )

    # ---- APPEND-ONLY ENFORCEMENT ----
    if dialect == "postgresql":  # pylint: disable=magic-value-comparison
        op.execute(
            """
            CREATE OR REPLACE FUNCTION event_store_forbid_mod() RETURNS trigger
            LANGUAGE plpgsql AS $$
            BEGIN
              RAISE EXCEPTION 'event_store is append-only; % not allowed', TG_OP
              USING ERRCODE = '0A000'; -- feature_not_supported
            END;
            $$;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_append_only
            BEFORE UPDATE OR DELETE ON event_store
            FOR EACH ROW
            EXECUTE FUNCTION event_store_forbid_mod();
            """
        )
    else:
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_update
            BEFORE UPDATE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; UPDATE not allowed');
            END;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_delete
            BEFORE DELETE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; DELETE not allowed');
            END;
            """
        )


def downgrade() -> None:
    """Downgrade schema."""
    dialect = op.get_context().dialect.name

    if dialect == "postgresql":  # pylint: disable=magic-value-comparison
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_append_only ON event_store;")
        op.execute("DROP FUNCTION IF EXISTS event_store_forbid_mod();")
    else:
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_delete;")
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_update;")

    op.drop_table("readmodels")
    op.drop_index(
        op.f("ix_event_store_aggregate_id_occurred_on_global_seq"),
        table_name="event_store",
    )
    op.drop_table("event_store")
