"""Defines the SQLAlchemy readmodel repository adapter package."""

from .repository import SqlAlchemyReadmodelRepository

__all__ = ["SqlAlchemyReadmodelRepository"]
