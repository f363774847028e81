"""Fake messages shared by the service layer tests."""

from dataclasses import dataclass

from strata.service_layer.messages import Command, CommandWithResponse, Event, Query

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class DoSomething(Command):
    """A plain command."""

    x: int = 0


@dataclass(frozen=True)
class Echo(CommandWithResponse[str]):
    """A command whose handler returns its text."""

    text: str


@dataclass(frozen=True)
class GetAnswer(Query[int]):
    """A query."""


@dataclass(frozen=True)
class SomethingHappened(Event):
    """An integration event."""

    n: int = 0


@dataclass(frozen=True)
class SomethingSpecificHappened(SomethingHappened):
    """A subtype of SomethingHappened."""
