"""Tests for the composition root."""

from dataclasses import dataclass

import pytest

from strata.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from strata.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from strata.adapters.id_generators import ULIDGenerator
from strata.adapters.readmodels.in_memory_adapters import InMemoryReadmodelRepository
from strata.adapters.readmodels.sqlalchemy_adapters import (
    SqlAlchemyReadmodelRepository,
)
from strata.bootstrap import (
    AppContainer,
    bootstrap,
    bootstrap_in_memory,
    build_message_bus,
    inject_dependencies,
)
from strata.config import DatabaseUrlNotSetError
from strata.service_layer.messagebus import MessageBus
from strata.service_layer.messages import Command, MessageKind
from strata.service_layer.registry import HandlerRegistry
from tests.helpers.example_domain import ExampleCreated, ExampleRenamed

# pylint: disable=unused-argument, magic-value-comparison, too-few-public-methods


@dataclass(frozen=True)
class Ping(Command):
    """A command for wiring tests."""


class TestInjectDependencies:
    """inject_dependencies"""

    @staticmethod
    def test_binds_only_parameters_the_handler_declares():
        """Unused dependencies are not passed."""

        def handler(cmd, event_store, id_generator):
            return cmd, event_store, id_generator

        injected = inject_dependencies(
            handler, {"event_store": "ES", "id_generator": "IG", "readmodels": "RM"}
        )
        assert injected("cmd") == ("cmd", "ES", "IG")
        assert injected.func is handler

    @staticmethod
    def test_handler_without_dependencies_is_returned_as_is():
        """Nothing to bind, nothing wrapped."""

        def handler(cmd):
            return cmd

        assert inject_dependencies(handler, {"event_store": "ES"}) is handler


class TestBuildMessageBus:
    """build_message_bus"""

    @pytest.mark.asyncio
    async def test_handlers_receive_dependencies_and_the_bus(self):
        """Dependencies and the bus itself are injected by parameter name."""
        seen = {}

        async def handler(cmd: Ping, bus, clock):
            seen.update(bus=bus, clock=clock)

        bus = build_message_bus(
            {(MessageKind.COMMAND, Ping): (handler,)}, {"clock": "tick"}
        )
        await bus.send(Ping())

        assert isinstance(bus, MessageBus)
        assert seen == {"bus": bus, "clock": "tick"}


class TestBootstrap:
    """bootstrap / bootstrap_in_memory"""

    @staticmethod
    def test_requires_a_database_url():
        """Without an URL or STRATA_DB_URL, bootstrap fails."""
        with pytest.raises(DatabaseUrlNotSetError):
            bootstrap()

    @pytest.mark.asyncio
    async def test_wires_sqlalchemy_adapters(self, sqlite_url_async):
        """A database URL gives SQLAlchemy adapters sharing one engine."""
        container = bootstrap(sqlite_url_async)
        try:
            assert isinstance(container, AppContainer)
            assert isinstance(container.event_store, SqlAlchemyEventStore)
            assert isinstance(container.readmodels, SqlAlchemyReadmodelRepository)
            assert isinstance(container.id_generator, ULIDGenerator)
            assert container.event_store.engine is container.engine
            assert container.readmodels.engine is container.engine
            assert container.event_store.publisher == container.message_bus.notify
        finally:
            await container.dispose()

    @pytest.mark.asyncio
    async def test_reads_url_from_environment(self, sqlite_url_async, monkeypatch):
        """STRATA_DB_URL is the default URL."""
        monkeypatch.setenv("STRATA_DB_URL", sqlite_url_async)
        container = bootstrap()
        try:
            assert str(container.engine.url) == sqlite_url_async
        finally:
            await container.dispose()

    @staticmethod
    def test_in_memory_wiring():
        """bootstrap_in_memory wires in-memory adapters and no engine."""
        container = bootstrap_in_memory()
        assert isinstance(container.event_store, InMemoryEventStore)
        assert isinstance(container.readmodels, InMemoryReadmodelRepository)
        assert container.engine is None
        assert container.event_store.publisher == container.message_bus.notify

    @staticmethod
    def test_event_types_include_subscribed_domain_events():
        """Domain events with handlers can be decoded without listing them."""
        registry = HandlerRegistry()
        registry.register_event(ExampleRenamed, lambda event: None)

        container = bootstrap_in_memory(registry, event_types=[ExampleCreated])

        assert container.event_store.event_mapper.event_registry == {
            "ExampleCreated": ExampleCreated,
            "ExampleRenamed": ExampleRenamed,
        }
