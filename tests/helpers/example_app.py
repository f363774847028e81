"""Commands, queries and handlers wiring the example domain to a message bus."""

from __future__ import annotations

from dataclasses import dataclass

from strata.interfaces.eventstore import EventStore
from strata.interfaces.id_generator import IdGenerator
from strata.interfaces.readmodels import ReadmodelRepository
from strata.service_layer.handlers import project_into
from strata.service_layer.messages import Command, CommandWithResponse, Query
from strata.service_layer.registry import HandlerRegistry
from strata.service_layer.repositories import AggregateRepository
from tests.helpers.example_domain import (
    Example,
    ExampleArchived,
    ExampleCreated,
    ExampleProjection,
    ExampleRenamed,
    ExampleSummary,
)

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class CreateExample(CommandWithResponse[str]):
    """Create an example and return its new id."""

    name: str


@dataclass(frozen=True)
class RenameExample(Command):
    """Rename an existing example."""

    example_id: str
    new_name: str


@dataclass(frozen=True)
class ArchiveExample(Command):
    """Archive an existing example."""

    example_id: str


@dataclass(frozen=True)
class GetExampleSummary(Query[ExampleSummary | None]):
    """Read the projected summary of an example."""

    example_id: str


@dataclass(frozen=True)
class GetExample(Query[Example]):
    """Rebuild an example from its stream."""

    example_id: str


async def create_example(
    cmd: CreateExample, event_store: EventStore, id_generator: IdGenerator
) -> str:
    """Start a new example stream."""
    example = Example.create(id_generator.new_id(), cmd.name)
    await AggregateRepository(event_store, Example).save(example)
    return example.id


async def rename_example(cmd: RenameExample, event_store: EventStore) -> None:
    """Rename through a loaded stream."""
    stream = await event_store.load_stream(cmd.example_id)
    renamed = stream.replay_as(Example).rename(cmd.new_name)
    await event_store.save_stream(stream.append(renamed.uncommitted_events))


async def archive_example(cmd: ArchiveExample, event_store: EventStore) -> None:
    """Archive through the aggregate repository."""
    repo = AggregateRepository(event_store, Example)
    await repo.save((await repo.load(cmd.example_id)).archive())


async def get_example_summary(
    query: GetExampleSummary, readmodels: ReadmodelRepository
) -> ExampleSummary | None:
    """Read the readmodel."""
    return await readmodels.load(ExampleSummary, query.example_id)


def get_example(query: GetExample, event_store: EventStore):
    """Sync handler returning an awaitable."""
    return AggregateRepository(event_store, Example).load(query.example_id)


def build_example_registry() -> HandlerRegistry:
    """Registry with every example handler and the summary projection."""
    registry = HandlerRegistry()
    registry.register_command(CreateExample, create_example)
    registry.register_command(RenameExample, rename_example)
    registry.register_command(ArchiveExample, archive_example)
    registry.register_query(GetExampleSummary, get_example_summary)
    registry.register_query(GetExample, get_example)
    for event_type in (ExampleCreated, ExampleRenamed, ExampleArchived):
        registry.register_event(event_type, project_into(ExampleProjection))
    return registry
