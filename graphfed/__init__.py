"""graph-federation: several graph data backends presented as one.

FederatedBackend fans each read operation out to its registered backends,
in parallel or sequentially with narrowing, isolates backend failures and
merges the answers deterministically in registration order.
"""

from graphfed.backends import BackendCapability, BackendDefinition, InMemoryBackend
from graphfed.orchestration import FederatedBackend, MergePolicy


__version__ = "0.1.0"
__all__ = [
    "BackendCapability",
    "BackendDefinition",
    "FederatedBackend",
    "InMemoryBackend",
    "MergePolicy",
    "__version__",
]
