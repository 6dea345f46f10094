"""Unit tests for call_backend() and apply_merge()."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from graphfed.backends.base import BackendDefinition
from graphfed.core.exceptions import BackendInvocationError, MergeContractViolationError
from graphfed.orchestration.isolation import apply_merge, call_backend
from graphfed.orchestration.operations import (
    OPERATIONS,
    LinkTypesOfRequest,
    OperationKind,
)
from tests.unit.factories import make_count


LINK_TYPES_OF = OPERATIONS[OperationKind.LINK_TYPES_OF]
REQUEST = LinkTypesOfRequest(element_id="alice")


def definition_with(link_types_of: AsyncMock) -> BackendDefinition:
    backend = MagicMock()
    backend.link_types_of = link_types_of
    return BackendDefinition(name="mocked", backend=backend)


class TestCallBackend:
    async def test_answer_tagged_with_backend_name(self) -> None:
        counts = [make_count("knows", 1, 1)]
        method = AsyncMock(return_value=counts)

        result = await call_backend(definition_with(method), LINK_TYPES_OF, REQUEST)

        method.assert_awaited_once_with("alice")
        assert result.source_name == "mocked"
        assert result.payload == counts
        assert result.error is None

    async def test_exception_becomes_absent_result(self) -> None:
        cause = ConnectionError("refused")
        method = AsyncMock(side_effect=cause)

        result = await call_backend(definition_with(method), LINK_TYPES_OF, REQUEST)

        assert result.is_absent
        assert isinstance(result.error, BackendInvocationError)
        assert result.error.operation == "link_types_of"
        assert result.error.__cause__ is cause

    async def test_cancellation_is_not_swallowed(self) -> None:
        method = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await call_backend(definition_with(method), LINK_TYPES_OF, REQUEST)


class TestApplyMerge:
    def test_returns_merged_value(self) -> None:
        assert apply_merge(LINK_TYPES_OF, []) == []

    def test_contract_violation_passes_through(self) -> None:
        error = MergeContractViolationError("bad", operation="link_types_of")
        spec = replace(LINK_TYPES_OF, merge=MagicMock(side_effect=error))

        with pytest.raises(MergeContractViolationError) as exc_info:
            apply_merge(spec, [])

        assert exc_info.value is error

    def test_other_exceptions_wrapped(self) -> None:
        spec = replace(LINK_TYPES_OF, merge=MagicMock(side_effect=KeyError("id")))

        with pytest.raises(MergeContractViolationError) as exc_info:
            apply_merge(spec, [])

        assert exc_info.value.operation == "link_types_of"
        assert isinstance(exc_info.value.__cause__, KeyError)
