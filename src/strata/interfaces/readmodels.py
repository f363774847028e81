"""Readmodel repository interfaces for STRATA.

Readmodels are stored one row per aggregate id, apart from the event log and
with no transactional link to it: a readmodel can be stale relative to the
stream it was projected from.

Contract overview
-----------------
- `save` upserts keyed by `readmodel.id` in one transaction. An existing row is
  replaced as a whole, never merged.
- `load` returns None when no row exists; absence is not an error.
- `delete` of an absent id is a no-op.
- Storage failures roll back and surface as `ReadmodelStoreError`, raised `from`
  the driver error (kept as `__cause__`).
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from strata.domain.projections import Readmodel

R = TypeVar("R", bound="Readmodel")


class ReadmodelStoreError(Exception):
    """Operational/timeout/connection errors; the transaction was rolled back."""


@dataclass(frozen=True, slots=True)
class ReadmodelRecord:
    """Persisted readmodel row."""

    aggregate_id: str
    readmodel_type: str
    readmodel_data: dict[str, Any]


class ReadmodelRepository(abc.ABC):
    """Keyed storage for projected readmodels."""

    @abc.abstractmethod
    async def save(self, readmodel: Readmodel) -> None:
        """Insert or fully replace the row for `readmodel.id`."""

    @abc.abstractmethod
    async def load(self, readmodel_cls: type[R], aggregate_id: str) -> R | None:
        """Return the stored readmodel decoded as `readmodel_cls`, or None."""

    @abc.abstractmethod
    async def delete(self, aggregate_id: str) -> None:
        """Remove the row for `aggregate_id`, if there is one."""
