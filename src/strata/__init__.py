"""STRATA

An event-sourcing and CQRS toolkit. Aggregates are rebuilt from append-only
histories of immutable domain events, readmodels are projected from those
histories, and a single message bus routes commands, queries and events to
their handlers.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
