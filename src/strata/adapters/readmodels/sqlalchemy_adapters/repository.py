"""SQLAlchemy-backed ReadmodelRepository adapter for STRATA.

Readmodels are upserted with the dialect's ``INSERT ... ON CONFLICT DO UPDATE``
(SQLite and PostgreSQL), so a save is a single statement in a single
transaction and always replaces the whole row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.exc import DBAPIError

from strata.adapters.codec import decode_payload, encode_payload, type_tag
from strata.adapters.db.dialects import DialectName
from strata.adapters.readmodels.schema import readmodels
from strata.interfaces.readmodels import (
    R,
    ReadmodelRecord,
    ReadmodelRepository,
    ReadmodelStoreError,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from strata.domain.projections import Readmodel

logger = logging.getLogger(__name__)


class SqlAlchemyReadmodelRepository(ReadmodelRepository):
    """SQLAlchemy-backed readmodel repository.

    Args:
        engine: Async engine to draw a connection from on every call.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.dialect = DialectName.from_sqlalchemy(engine)

    async def save(self, readmodel: Readmodel) -> None:
        record = ReadmodelRecord(
            aggregate_id=readmodel.id,
            readmodel_type=type_tag(readmodel),
            readmodel_data=encode_payload(readmodel),
        )
        stmt = self.dialect.insert(readmodels).values(
            aggregate_id=record.aggregate_id,
            readmodel_type=record.readmodel_type,
            readmodel_data=record.readmodel_data,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[readmodels.c.aggregate_id],
            set_={
                "readmodel_type": stmt.excluded.readmodel_type,
                "readmodel_data": stmt.excluded.readmodel_data,
            },
        )
        try:
            async with self.engine.begin() as connection:
                await connection.execute(stmt)
        except DBAPIError as e:
            raise ReadmodelStoreError(str(e)) from e
        logger.debug("Saved %s for aggregate %s", record.readmodel_type, readmodel.id)

    async def load(self, readmodel_cls: type[R], aggregate_id: str) -> R | None:
        stmt = select(readmodels.c.readmodel_data).where(
            readmodels.c.aggregate_id == aggregate_id
        )
        try:
            async with self.engine.connect() as connection:
                data = (await connection.execute(stmt)).scalar_one_or_none()
        except DBAPIError as e:
            raise ReadmodelStoreError(str(e)) from e

        if data is None:
            return None
        return decode_payload(readmodel_cls, data)

    async def delete(self, aggregate_id: str) -> None:
        stmt = delete(readmodels).where(readmodels.c.aggregate_id == aggregate_id)
        try:
            async with self.engine.begin() as connection:
                result = await connection.execute(stmt)
        except DBAPIError as e:
            raise ReadmodelStoreError(str(e)) from e
        if not result.rowcount:
            logger.debug("No readmodel to delete for aggregate %s", aggregate_id)
