"""Bootstrap the message bus with handlers and storage adapters."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from strata import config
from strata.adapters.db.engine import make_engine
from strata.adapters.eventstore.event_mapper import EventMapper
from strata.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from strata.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from strata.adapters.id_generators import ULIDGenerator
from strata.adapters.readmodels.in_memory_adapters import InMemoryReadmodelRepository
from strata.adapters.readmodels.sqlalchemy_adapters import (
    SqlAlchemyReadmodelRepository,
)
from strata.domain.events import DomainEvent
from strata.service_layer.messagebus import MessageBus
from strata.service_layer.messages import MessageKind
from strata.service_layer.registry import HandlerRegistry

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from strata.interfaces.eventstore import EventStore
    from strata.interfaces.id_generator import IdGenerator
    from strata.interfaces.readmodels import ReadmodelRepository

logger = logging.getLogger(__name__)

HandlerMapping = Mapping[tuple[MessageKind, type], tuple[Callable[..., Any], ...]]


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus
    event_store: EventStore
    readmodels: ReadmodelRepository
    id_generator: IdGenerator
    engine: AsyncEngine | None = None

    async def dispose(self) -> None:
        """Release pooled database connections, if there are any."""
        if self.engine is not None:
            await self.engine.dispose()


def build_message_bus(
    handlers: HandlerMapping, dependencies: Mapping[str, object]
) -> MessageBus:
    """Build a message bus with injected dependencies.

    The bus itself is available to handlers as the `bus` dependency.
    """
    injected: dict[tuple[MessageKind, type], tuple[Callable[..., Any], ...]] = {}
    bus = MessageBus(injected)
    deps = {"bus": bus, **dependencies}
    for key, key_handlers in handlers.items():
        injected[key] = tuple(inject_dependencies(h, deps) for h in key_handlers)
    return bus


def bootstrap(
    db_url: str | None = None,
    registry: HandlerRegistry | None = None,
    event_types: Iterable[type[DomainEvent]] = (),
) -> AppContainer:
    """Wire the application against a database.

    Args:
        db_url: SQLAlchemy async URL; defaults to `STRATA_DB_URL`.
        registry: Handlers to dispatch to. Defaults to an empty registry.
        event_types: Domain event classes the store must be able to decode.
            Domain events with registered handlers are included automatically.

    Raises:
        DatabaseUrlNotSetError: If no URL is given and `STRATA_DB_URL` is unset.
    """
    registry = registry or HandlerRegistry()
    engine = make_engine(db_url or config.get_db_url())
    event_store = SqlAlchemyEventStore(
        engine, _build_event_mapper(registry, event_types)
    )
    return _assemble(
        registry,
        event_store=event_store,
        readmodels=SqlAlchemyReadmodelRepository(engine),
        engine=engine,
    )


def bootstrap_in_memory(
    registry: HandlerRegistry | None = None,
    event_types: Iterable[type[DomainEvent]] = (),
) -> AppContainer:
    """Wire the application against in-memory storage."""
    registry = registry or HandlerRegistry()
    event_store = InMemoryEventStore(_build_event_mapper(registry, event_types))
    return _assemble(
        registry, event_store=event_store, readmodels=InMemoryReadmodelRepository()
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    if not deps:
        return handler
    return functools.partial(handler, **deps)


def _build_event_mapper(
    registry: HandlerRegistry, event_types: Iterable[type[DomainEvent]]
) -> EventMapper:
    subscribed = [
        message_type
        for kind, message_type in registry.handlers()
        if kind is MessageKind.EVENT and issubclass(message_type, DomainEvent)
    ]
    return EventMapper([*event_types, *subscribed])


def _assemble(
    registry: HandlerRegistry,
    *,
    event_store: SqlAlchemyEventStore | InMemoryEventStore,
    readmodels: ReadmodelRepository,
    engine: AsyncEngine | None = None,
) -> AppContainer:
    id_generator = ULIDGenerator()
    message_bus = build_message_bus(
        registry.handlers(),
        {
            "event_store": event_store,
            "readmodels": readmodels,
            "id_generator": id_generator,
        },
    )
    event_store.publisher = message_bus.notify
    logger.debug(
        "Bootstrapped %s with %d handler key(s)",
        type(event_store).__name__,
        len(registry.handlers()),
    )
    return AppContainer(
        message_bus=message_bus,
        event_store=event_store,
        readmodels=readmodels,
        id_generator=id_generator,
        engine=engine,
    )
