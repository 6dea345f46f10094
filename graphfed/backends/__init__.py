"""Graph data backends.

Backends:
- base: BackendCapability ABC, BackendDefinition
- memory: InMemoryBackend
"""

from graphfed.backends.base import (
    BACKEND_OPERATIONS,
    BackendCapability,
    BackendDefinition,
)
from graphfed.backends.memory import InMemoryBackend


__all__: list[str] = [
    "BACKEND_OPERATIONS",
    "BackendCapability",
    "BackendDefinition",
    "InMemoryBackend",
]
