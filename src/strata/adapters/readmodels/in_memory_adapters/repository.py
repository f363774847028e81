"""In memory readmodel repository.

Readmodels are encoded exactly like the SQLAlchemy adapter does, so decoding
behaves the same; all data is lost when the instance is discarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from strata.adapters.codec import decode_payload, encode_payload, type_tag
from strata.interfaces.readmodels import R, ReadmodelRecord, ReadmodelRepository

if TYPE_CHECKING:
    from strata.domain.projections import Readmodel


class InMemoryReadmodelRepository(ReadmodelRepository):
    """Dict-backed readmodel repository for tests and prototyping."""

    def __init__(self) -> None:
        self._rows: dict[str, ReadmodelRecord] = {}

    async def save(self, readmodel: Readmodel) -> None:
        self._rows[readmodel.id] = ReadmodelRecord(
            aggregate_id=readmodel.id,
            readmodel_type=type_tag(readmodel),
            readmodel_data=encode_payload(readmodel),
        )

    async def load(self, readmodel_cls: type[R], aggregate_id: str) -> R | None:
        if (record := self._rows.get(aggregate_id)) is None:
            return None
        return decode_payload(readmodel_cls, record.readmodel_data)

    async def delete(self, aggregate_id: str) -> None:
        self._rows.pop(aggregate_id, None)

    @property
    def records(self) -> dict[str, ReadmodelRecord]:
        """Stored rows by aggregate id (a copy)."""
        return dict(self._rows)
