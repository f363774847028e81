"""Defines the in-memory readmodel repository adapter package."""

from .repository import InMemoryReadmodelRepository

__all__ = ["InMemoryReadmodelRepository"]
