"""Sequential narrowing mode - one backend at a time, asking only for what is missing.

SequentialNarrowingMode walks the registry in order, awaiting each backend
before deciding whether and how to call the next one:

- NARROWABLE operations (class_info, property_info, link_types_info,
  element_info, links_info): the request sent to each backend is narrowed
  to the ids not yet resolved by earlier backends. Once nothing is left,
  no further backend is called.
- BINARY operations (link_types_of, link_elements, filter): backends are
  asked in order until one gives a non-empty answer; that answer ends the
  sequence (first success wins, later backends are never called).

A failing backend is logged and skipped; the accumulator is left as it
was and the next backend is tried. There are no retries.

Flow:
    Request → B1(narrowed) → merge → B2(narrowed further) → merge → ... → Response
"""

from typing import Any

from graphfed.core.logging import get_logger
from graphfed.models.results import TaggedResult
from graphfed.orchestration.isolation import apply_merge, call_backend
from graphfed.orchestration.operations import (
    OperationRequest,
    OperationShape,
    OperationSpec,
    is_empty,
)
from graphfed.orchestration.registry import BackendRegistry


class SequentialNarrowingMode:
    """Sequential narrowing mode - ordered, narrowing, short-circuiting.

    The accumulator of one execute() call is local to that call, so
    concurrent operations on the same mode never see each other's state.

    Attributes:
        registry: Backends, in the order they are asked.
    """

    def __init__(self, registry: BackendRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> BackendRegistry:
        """Get the backend registry."""
        return self._registry

    async def execute(self, spec: OperationSpec, request: OperationRequest) -> Any:
        """Run one operation backend by backend.

        Args:
            spec: A NARROWABLE or BINARY operation.
            request: The caller's full request snapshot.

        Returns:
            The merge of every answer collected.

        Raises:
            ValueError: If spec is a CATALOG operation, or a NARROWABLE one
                without a narrowing rule.
            MergeContractViolationError: If the merge function fails.
        """
        if spec.shape is OperationShape.NARROWABLE:
            return await self._narrowing(spec, request)
        if spec.shape is OperationShape.BINARY:
            return await self._first_success(spec, request)
        raise ValueError(f"{spec.kind.value} cannot be fetched sequentially")

    async def _narrowing(self, spec: OperationSpec, request: OperationRequest) -> Any:
        narrow = spec.narrow
        if narrow is None:
            raise ValueError(f"{spec.kind.value} has no narrowing rule")

        collected: list[TaggedResult[Any]] = []
        accumulated = apply_merge(spec, collected)

        for definition in self._registry:
            narrowed = narrow(request, accumulated)
            if narrowed is None:
                # Remaining ids only shrink, so every later backend would be skipped too
                get_logger(__name__).debug(
                    "narrowing_complete",
                    operation=spec.kind.value,
                    skipped_from=definition.name,
                )
                break

            result = await call_backend(definition, spec, narrowed)
            if result.is_absent:
                continue
            collected.append(result)
            accumulated = apply_merge(spec, collected)

        return accumulated

    async def _first_success(self, spec: OperationSpec, request: OperationRequest) -> Any:
        collected: list[TaggedResult[Any]] = []

        for definition in self._registry:
            result = await call_backend(definition, spec, request)
            if is_empty(result.payload):
                continue
            collected.append(result)
            get_logger(__name__).debug(
                "first_success",
                operation=spec.kind.value,
                backend=definition.name,
            )
            break

        return apply_merge(spec, collected)
