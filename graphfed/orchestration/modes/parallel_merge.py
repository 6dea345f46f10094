"""Parallel merge mode - every backend at once → merge.

ParallelMergeMode implements the fan-out-and-merge federation policy:
1. The operation is issued on every registered backend before any is awaited
2. The mode waits until every call has settled (success or failure)
3. Failed calls become absent TaggedResults; nothing is raised
4. Results, in registry order, go through the operation's merge function

Flow:
    Request → [All backends](parallel) → TaggedResults(registry order) → Merge → Response

Registry order, not completion order, is what the merge function sees, so a
fast backend can never outrank an earlier-registered slow one.
"""

import asyncio
from typing import Any

from graphfed.models.results import TaggedResult
from graphfed.orchestration.isolation import apply_merge, call_backend
from graphfed.orchestration.operations import OperationRequest, OperationSpec
from graphfed.orchestration.registry import BackendRegistry


class ParallelMergeMode:
    """Parallel merge mode - all backends in parallel, then merge.

    Attributes:
        registry: Backends to fan out to.

    Example:
        mode = ParallelMergeMode(registry)
        elements = await mode.execute(
            OPERATIONS[OperationKind.ELEMENT_INFO],
            ElementInfoRequest(element_ids=("a", "b")),
        )
    """

    def __init__(self, registry: BackendRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> BackendRegistry:
        """Get the backend registry."""
        return self._registry

    async def execute(self, spec: OperationSpec, request: OperationRequest) -> Any:
        """Run one operation on every backend and merge the answers.

        Args:
            spec: Operation to run.
            request: Request snapshot, shared read-only by every backend call.

        Returns:
            The merge function's unified result.

        Raises:
            MergeContractViolationError: If the merge function fails.
        """
        results = await self.gather(spec, request)
        return apply_merge(spec, results)

    async def gather(
        self, spec: OperationSpec, request: OperationRequest
    ) -> list[TaggedResult[Any]]:
        """Call every backend concurrently; results in registry order.

        asyncio.gather keeps argument order, and call_backend never raises,
        so one failing backend cannot cancel or reorder the others.
        """
        tasks = [call_backend(definition, spec, request) for definition in self._registry]
        return list(await asyncio.gather(*tasks))
