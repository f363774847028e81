"""Bootstrap (composition root) for STRATA.

Assembles the application at runtime: wires concrete adapters (event store,
readmodel repository, id generator) to service-layer handlers, builds the
message bus, and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `strata.adapters`, `strata.service_layer`,
  `strata.interfaces`, `strata.domain`, and `strata.config`.
- Inner layers must not import `strata.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    bootstrap_in_memory,
    build_message_bus,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "bootstrap_in_memory",
    "build_message_bus",
    "inject_dependencies",
]
