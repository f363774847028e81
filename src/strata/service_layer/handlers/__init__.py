"""Reusable service layer handlers."""

from .projection_handlers import project_into

__all__ = ["project_into"]
