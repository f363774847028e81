"""Handler registration for the message bus.

Handlers are registered deliberately, one call (or decorator) per message
type, before the bus is built. The registry validates while it is being
filled: a second handler for the same command or query type is a
configuration error, raised immediately rather than resolved by order.

Example:
    ```py
    registry = HandlerRegistry()

    @registry.command(RenameExample)
    async def rename_example(cmd: RenameExample, event_store: EventStore) -> None: ...

    @registry.event(ExampleRenamed)
    async def notify_renamed(event: ExampleRenamed) -> None: ...
    ```
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from strata.service_layer.messages import MessageKind, kind_of

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

HandlerKey = tuple[MessageKind, type]


class DuplicateHandlerError(ValueError):
    """Raised when a second handler is registered for a command or query type."""

    def __init__(self, kind: MessageKind, message_type: type) -> None:
        super().__init__(
            f"A handler is already registered for {kind.value} {message_type.__name__}"
        )
        self.kind = kind
        self.message_type = message_type


class HandlerRegistry:
    """Collects handlers keyed by `(MessageKind, concrete message type)`."""

    def __init__(self) -> None:
        self._single: dict[HandlerKey, Callable[..., Any]] = {}
        self._many: defaultdict[HandlerKey, list[Callable[..., Any]]] = defaultdict(
            list
        )

    # --- Registration ---

    def register_command(self, command_type: type, handler: Callable[..., Any]) -> None:
        """Register the one handler for `command_type`."""
        self._register_single(MessageKind.COMMAND, command_type, handler)

    def register_query(self, query_type: type, handler: Callable[..., Any]) -> None:
        """Register the one handler for `query_type`."""
        self._register_single(MessageKind.QUERY, query_type, handler)

    def register_event(self, event_type: type, handler: Callable[..., Any]) -> None:
        """Add a subscriber for `event_type`."""
        self._check_kind(MessageKind.EVENT, event_type)
        self._many[(MessageKind.EVENT, event_type)].append(handler)
        logger.debug("Registered event handler for %s", event_type.__name__)

    # --- Decorator forms ---

    def command(self, command_type: type) -> Callable[[F], F]:
        """Decorator form of `register_command`."""

        def decorator(handler: F) -> F:
            self.register_command(command_type, handler)
            return handler

        return decorator

    def query(self, query_type: type) -> Callable[[F], F]:
        """Decorator form of `register_query`."""

        def decorator(handler: F) -> F:
            self.register_query(query_type, handler)
            return handler

        return decorator

    def event(self, event_type: type) -> Callable[[F], F]:
        """Decorator form of `register_event`."""

        def decorator(handler: F) -> F:
            self.register_event(event_type, handler)
            return handler

        return decorator

    # --- Output ---

    def handlers(self) -> Mapping[HandlerKey, tuple[Callable[..., Any], ...]]:
        """Frozen handler mapping for `MessageBus`.

        Every key maps to a tuple; command and query keys hold exactly one
        handler, event keys hold their subscribers in registration order.
        """
        mapping = {key: (handler,) for key, handler in self._single.items()}
        mapping.update({key: tuple(hs) for key, hs in self._many.items() if hs})
        return MappingProxyType(mapping)

    # --- Internals ---

    def _register_single(
        self, kind: MessageKind, message_type: type, handler: Callable[..., Any]
    ) -> None:
        self._check_kind(kind, message_type)
        key = (kind, message_type)
        if key in self._single:
            raise DuplicateHandlerError(kind, message_type)
        self._single[key] = handler
        logger.debug("Registered %s handler for %s", kind.value, message_type.__name__)

    @staticmethod
    def _check_kind(kind: MessageKind, message_type: type) -> None:
        if (actual := kind_of(message_type)) is not kind:
            raise TypeError(
                f"{message_type.__name__} is a {actual.value}, not a {kind.value}"
            )
