"""Orchestrator - federation of several backends behind one backend interface.

FederatedBackend implements BackendCapability itself, so a federation can be
used (or even registered inside another federation) wherever a single
backend is expected. Each operation is dispatched through the OPERATIONS
table to the configured merge policy:

- parallel_merge: every backend at once, then merge (default)
- sequential_narrowing: one backend at a time, narrowing id sets and
  stopping at the first non-empty answer for found-or-empty operations

class_tree and link_types always use parallel_merge: a whole-catalog fetch
has no ids to narrow.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any

from graphfed.backends.base import BackendCapability
from graphfed.core.config import load_settings
from graphfed.core.exceptions import ConfigurationError
from graphfed.models.entities import (
    ClassModel,
    ElementModel,
    FilterParams,
    LinkCount,
    LinkDirection,
    LinkModel,
    LinkType,
    PropertyModel,
)
from graphfed.observability.tracing import traced
from graphfed.orchestration.modes.parallel_merge import ParallelMergeMode
from graphfed.orchestration.modes.sequential_narrowing import SequentialNarrowingMode
from graphfed.orchestration.operations import (
    OPERATIONS,
    CatalogRequest,
    ClassInfoRequest,
    ElementInfoRequest,
    FilterRequest,
    LinkElementsRequest,
    LinksInfoRequest,
    LinkTypesInfoRequest,
    LinkTypesOfRequest,
    OperationKind,
    OperationRequest,
    OperationShape,
    PropertyInfoRequest,
)
from graphfed.orchestration.registry import BackendRegistry, BackendSpec


class MergePolicy(Enum):
    """Fan-out policies of a federated backend."""

    PARALLEL_MERGE = "parallel_merge"
    SEQUENTIAL_NARROWING = "sequential_narrowing"


class FederatedBackend(BackendCapability):
    """Several backends presented as one.

    Attributes:
        registry: The registered backends, in priority order.
        policy: The merge policy for narrowable and found-or-empty operations.

    Example:
        federation = FederatedBackend(
            [
                {"name": "sparql", "backend": sparql_backend},
                {"name": "local", "backend": InMemoryBackend.from_snapshot(data)},
            ],
            policy="sequential_narrowing",
        )
        elements = await federation.element_info(["alice", "bob"])
    """

    def __init__(
        self,
        backends: Sequence[BackendSpec],
        policy: str | MergePolicy | None = None,
    ) -> None:
        """Initialize the federation.

        Args:
            backends: Bare backends (auto-named backend_1, backend_2, ...),
                BackendDefinitions or {"name": ..., "backend": ...} mappings.
            policy: Merge policy (string or enum). None uses the configured
                default (GRAPHFED_MERGE_POLICY, parallel_merge unless set).

        Raises:
            ConfigurationError: If the policy is unknown or the backend list
                is invalid.
        """
        self._policy = _resolve_policy(policy)
        self._registry = BackendRegistry(backends)
        self._parallel = ParallelMergeMode(self._registry)
        self._sequential = SequentialNarrowingMode(self._registry)

    @property
    def registry(self) -> BackendRegistry:
        """Get the backend registry."""
        return self._registry

    @property
    def policy(self) -> MergePolicy:
        """Get the merge policy."""
        return self._policy

    def __repr__(self) -> str:
        return f"FederatedBackend({self._registry.names!r}, policy={self._policy.value!r})"

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def _run(self, kind: OperationKind, request: OperationRequest) -> Any:
        """Run one operation under the policy that applies to it.

        Raises:
            MergeContractViolationError: If the operation's merge fails.
        """
        spec = OPERATIONS[kind]
        sequential = (
            self._policy is MergePolicy.SEQUENTIAL_NARROWING
            and spec.shape is not OperationShape.CATALOG
        )
        policy = MergePolicy.SEQUENTIAL_NARROWING if sequential else MergePolicy.PARALLEL_MERGE
        with traced(
            f"federation.{kind.value}",
            **{
                "graphfed.policy": policy.value,
                "graphfed.backend_count": len(self._registry),
            },
        ):
            if sequential:
                return await self._sequential.execute(spec, request)
            return await self._parallel.execute(spec, request)

    # -------------------------------------------------------------------------
    # BackendCapability
    # -------------------------------------------------------------------------

    async def class_tree(self) -> list[ClassModel]:
        return await self._run(OperationKind.CLASS_TREE, CatalogRequest())

    async def class_info(self, class_ids: list[str]) -> list[ClassModel]:
        return await self._run(
            OperationKind.CLASS_INFO, ClassInfoRequest(class_ids=tuple(class_ids))
        )

    async def property_info(self, property_ids: list[str]) -> dict[str, PropertyModel]:
        return await self._run(
            OperationKind.PROPERTY_INFO,
            PropertyInfoRequest(property_ids=tuple(property_ids)),
        )

    async def link_types_info(self, link_type_ids: list[str]) -> list[LinkType]:
        return await self._run(
            OperationKind.LINK_TYPES_INFO,
            LinkTypesInfoRequest(link_type_ids=tuple(link_type_ids)),
        )

    async def link_types(self) -> list[LinkType]:
        return await self._run(OperationKind.LINK_TYPES, CatalogRequest())

    async def element_info(self, element_ids: list[str]) -> dict[str, ElementModel]:
        return await self._run(
            OperationKind.ELEMENT_INFO,
            ElementInfoRequest(element_ids=tuple(element_ids)),
        )

    async def links_info(
        self, element_ids: list[str], link_type_ids: list[str]
    ) -> list[LinkModel]:
        return await self._run(
            OperationKind.LINKS_INFO,
            LinksInfoRequest(
                element_ids=tuple(element_ids), link_type_ids=tuple(link_type_ids)
            ),
        )

    async def link_types_of(self, element_id: str) -> list[LinkCount]:
        return await self._run(
            OperationKind.LINK_TYPES_OF, LinkTypesOfRequest(element_id=element_id)
        )

    async def link_elements(
        self,
        element_id: str,
        link_id: str,
        limit: int,
        offset: int,
        direction: LinkDirection | None = None,
    ) -> dict[str, ElementModel]:
        return await self._run(
            OperationKind.LINK_ELEMENTS,
            LinkElementsRequest(
                element_id=element_id,
                link_id=link_id,
                limit=limit,
                offset=offset,
                direction=direction,
            ),
        )

    async def filter(self, params: FilterParams) -> dict[str, ElementModel]:
        return await self._run(OperationKind.FILTER, FilterRequest(params=params))


def _resolve_policy(policy: str | MergePolicy | None) -> MergePolicy:
    if policy is None:
        policy = load_settings().merge_policy
    if isinstance(policy, MergePolicy):
        return policy
    try:
        return MergePolicy(policy)
    except ValueError:
        valid = ", ".join(p.value for p in MergePolicy)
        raise ConfigurationError(
            f"Unknown merge policy '{policy}', expected one of: {valid}",
            setting="merge_policy",
        ) from None
