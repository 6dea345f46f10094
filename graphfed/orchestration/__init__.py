"""Federation of backends.

Modules:
- orchestrator: FederatedBackend, MergePolicy
- registry: BackendRegistry
- operations: OperationKind dispatch table and request snapshots
- merge: per-operation merge functions
- isolation: failure-isolated backend calls
- modes/: parallel_merge and sequential_narrowing policies
"""

from graphfed.orchestration.orchestrator import FederatedBackend, MergePolicy
from graphfed.orchestration.registry import BackendRegistry


__all__: list[str] = ["BackendRegistry", "FederatedBackend", "MergePolicy"]
