"""Message taxonomy for the message bus.

| Base class                 | Handlers     | Result |
|----------------------------|--------------|--------|
| ``Command``                | exactly one  | None   |
| ``CommandWithResponse[R]`` | exactly one  | R      |
| ``Query[R]``               | exactly one  | R      |
| ``Event``                  | one or more  | None   |

Domain events (`strata.domain.events.DomainEvent`) are dispatched with the
same rules as ``Event``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from strata.domain.events import DomainEvent

R = TypeVar("R")


class MessageKind(str, Enum):
    """The part of the handler key that tells how a message is dispatched."""

    COMMAND = "command"
    QUERY = "query"
    EVENT = "event"


@dataclass(frozen=True)
class Command:
    """Base class for commands that return nothing."""


@dataclass(frozen=True)
class CommandWithResponse(Generic[R]):
    """Base class for commands whose handler returns an `R`."""


@dataclass(frozen=True)
class Query(Generic[R]):
    """Base class for queries. Handlers return an `R` and must not change state."""


@dataclass(frozen=True)
class Event:
    """Base class for integration events broadcast to every subscriber."""


Message = Command | CommandWithResponse | Query | Event | DomainEvent


def kind_of(message: object) -> MessageKind:
    """Return the kind a message (or message class) is dispatched as.

    Raises:
        TypeError: If the object is not a message.
    """
    cls = message if isinstance(message, type) else type(message)
    if issubclass(cls, (Command, CommandWithResponse)):
        return MessageKind.COMMAND
    if issubclass(cls, Query):
        return MessageKind.QUERY
    if issubclass(cls, (Event, DomainEvent)):
        return MessageKind.EVENT
    raise TypeError(f"{cls.__name__} is not a command, query or event")
