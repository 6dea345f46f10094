"""Failure-isolated backend calls and guarded merges.

call_backend() is the only place a federation awaits a backend: whatever
the backend raises becomes an absent TaggedResult plus a warning log.
apply_merge() is the only place a merge function runs: whatever it raises
reaches the caller as MergeContractViolationError.
"""

from collections.abc import Sequence
from typing import Any

from graphfed.backends.base import BackendDefinition
from graphfed.core.exceptions import BackendInvocationError, MergeContractViolationError
from graphfed.core.logging import get_logger
from graphfed.models.results import TaggedResult
from graphfed.observability.tracing import traced
from graphfed.orchestration.operations import OperationRequest, OperationSpec


async def call_backend(
    definition: BackendDefinition,
    spec: OperationSpec,
    request: OperationRequest,
) -> TaggedResult[Any]:
    """Invoke one operation on one backend without letting it fail.

    Args:
        definition: The backend and its registry name.
        spec: Operation to invoke.
        request: Immutable request snapshot for this backend.

    Returns:
        TaggedResult with the backend's answer, or with payload None and the
        isolated error when the call raised.
    """
    operation = spec.kind.value
    with traced(
        f"backend.{operation}",
        **{"graphfed.backend": definition.name, "graphfed.operation": operation},
    ) as span:
        try:
            payload = await spec.invoke(definition.backend, request)
        except Exception as e:
            error = BackendInvocationError(
                f"Backend '{definition.name}' failed on {operation}: {e}",
                backend_name=definition.name,
                operation=operation,
            )
            error.__cause__ = e
            get_logger(__name__).warning(
                "backend_call_failed",
                backend=definition.name,
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
            span.set_attribute("graphfed.outcome", "failed")
            return TaggedResult(source_name=definition.name, error=error)

        span.set_attribute(
            "graphfed.outcome", "absent" if payload is None else "answered"
        )
        return TaggedResult(source_name=definition.name, payload=payload)


def apply_merge(spec: OperationSpec, results: Sequence[TaggedResult[Any]]) -> Any:
    """Run the operation's merge function.

    Raises:
        MergeContractViolationError: If the merge function raised anything.
    """
    try:
        return spec.merge(results)
    except MergeContractViolationError:
        raise
    except Exception as e:
        raise MergeContractViolationError(
            f"Merge of {spec.kind.value} failed: {e}",
            operation=spec.kind.value,
        ) from e
