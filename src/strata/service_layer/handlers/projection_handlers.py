"""Handlers that keep readmodels in step with the event log."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strata.domain.events import DomainEvent
    from strata.domain.projections import Projection
    from strata.interfaces.eventstore import EventStore
    from strata.interfaces.readmodels import ReadmodelRepository

logger = logging.getLogger(__name__)


def project_into(
    projection_cls: type[Projection],
) -> Callable[..., Awaitable[None]]:
    """Build an event handler that refreshes the readmodel of `projection_cls`.

    The handler reloads the whole stream of the event's aggregate, projects it,
    then upserts the result. A projection that yields None deletes the stored
    readmodel instead.

    Example:
        ```py
        registry.register_event(ExampleCreated, project_into(ExampleProjection))
        registry.register_event(ExampleRenamed, project_into(ExampleProjection))
        ```
    """

    async def update_readmodel(
        event: DomainEvent,
        event_store: EventStore,
        readmodels: ReadmodelRepository,
    ) -> None:
        aggregate_id = event.aggregate_id
        stream = await event_store.load_stream(aggregate_id)
        readmodel = projection_cls(stream).project(aggregate_id)
        if readmodel is None:
            logger.debug(
                "%s yielded nothing for %s; removing readmodel",
                projection_cls.__name__,
                aggregate_id,
            )
            await readmodels.delete(aggregate_id)
            return
        await readmodels.save(readmodel)

    update_readmodel.__name__ = f"project_into_{projection_cls.__name__}"
    return update_readmodel
