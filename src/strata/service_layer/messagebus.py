"""Message bus: the single entry point to the service layer.

Handlers are looked up by `(MessageKind, type(message))`. The concrete type is
the only key; a handler registered for a base class never receives messages
of its subclasses.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from strata.service_layer.messages import (
    CommandWithResponse,
    MessageKind,
    Query,
    kind_of,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

Handler = Callable[[Any], Any]


class MessageBusError(Exception):
    """Base class for message bus errors."""


class HandlerNotRegistered(MessageBusError, LookupError):
    """Raised when no handler is registered for a message's concrete type."""

    def __init__(self, kind: MessageKind, message: object) -> None:
        super().__init__(
            f"No {kind.value} handler registered for {type(message).__name__}"
        )
        self.kind = kind
        self.message = message


class EventHandlersFailed(ExceptionGroup):
    """Raised when more than one event handler failed during a fan-out."""

    def derive(self, excs):
        return EventHandlersFailed(self.message, excs)


class MessageBus:
    """Routes commands, queries and events to their handlers.

    Args:
        handlers: Mapping of `(MessageKind, message type)` to a tuple of
            callables taking the message as their only argument. Dependencies
            are expected to be bound already (see `strata.bootstrap`).
            Handlers may be coroutine functions or plain callables.
    """

    def __init__(
        self, handlers: Mapping[tuple[MessageKind, type], tuple[Handler, ...]]
    ) -> None:
        self._handlers = handlers

    # --- Single-handler dispatch ---

    async def send(self, command: Any) -> Any:
        """Dispatch a command (or query) to its one handler.

        Returns:
            The handler's result; `None` for a plain `Command`.

        Raises:
            HandlerNotRegistered: If no handler is registered for the type.
            TypeError: If `command` is an event.
            Exception: Whatever the handler raises.
        """
        kind = kind_of(command)
        if kind is MessageKind.EVENT:
            raise TypeError(f"{type(command).__name__} is an event; use publish()")
        return await self._dispatch_single(kind, command)

    async def query(self, query: Query[R]) -> R:
        """Dispatch a query to its one handler and return the result."""
        return await self._dispatch_single(MessageKind.QUERY, query)

    async def request(self, command: CommandWithResponse[R]) -> R:
        """Typed alias of `send` for commands that return a value."""
        return await self._dispatch_single(MessageKind.COMMAND, command)

    # --- Fan-out dispatch ---

    async def publish(self, event: Any) -> None:
        """Dispatch an event to every handler registered for its concrete type.

        All handlers run concurrently and are awaited to completion, whether or
        not some of them fail.

        Raises:
            HandlerNotRegistered: If the event type has no handlers.
            EventHandlersFailed: If more than one handler failed.
            Exception: The single handler's exception if exactly one failed.
        """
        handlers = self._handlers.get((MessageKind.EVENT, type(event)), ())
        if not handlers:
            logger.error("No event handler registered for %s", type(event).__name__)
            raise HandlerNotRegistered(MessageKind.EVENT, event)
        await self._fan_out(event, handlers)

    async def notify(self, event: Any) -> None:
        """Like `publish`, but an event without subscribers is not an error.

        This is the publisher the event store is wired with: a committed domain
        event does not need to have subscribers.
        """
        handlers = self._handlers.get((MessageKind.EVENT, type(event)), ())
        if not handlers:
            logger.debug("No subscribers for %s", type(event).__name__)
            return
        await self._fan_out(event, handlers)

    def handlers_for(
        self, kind: MessageKind, message_type: type
    ) -> tuple[Handler, ...]:
        """Registered handlers for a key, or an empty tuple."""
        return self._handlers.get((kind, message_type), ())

    # --- Internals ---

    async def _dispatch_single(self, kind: MessageKind, message: Any) -> Any:
        if handlers := self._handlers.get((kind, type(message))):
            return await self._invoke(handlers[0], message, kind)
        logger.error("No %s handler found for %s", kind.value, type(message).__name__)
        raise HandlerNotRegistered(kind, message)

    async def _fan_out(self, event: Any, handlers: tuple[Handler, ...]) -> None:
        results = await asyncio.gather(
            *(self._invoke(handler, event, MessageKind.EVENT) for handler in handlers),
            return_exceptions=True,
        )
        errors = []
        for result in results:
            if isinstance(result, Exception):
                errors.append(result)
            elif isinstance(result, BaseException):
                # Cancellation and interpreter exits are not handler failures.
                raise result
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise EventHandlersFailed(
                f"{len(errors)} of {len(handlers)} handlers failed for "
                f"{type(event).__name__}",
                errors,
            )

    async def _invoke(self, handler: Handler, message: Any, kind: MessageKind) -> Any:
        handler_name = self._get_handler_name(handler)
        logger.debug(
            "Handling %s %s with handler %s", kind.value, message, handler_name
        )
        try:
            result = handler(message)
            if inspect.isawaitable(result):
                result = await result
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling %s %s with handler %s",
                kind.value,
                message,
                handler_name,
            )
            raise
        return result

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
