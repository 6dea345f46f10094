"""Custom exceptions for graph-federation.

Exception Hierarchy:
    GraphFederationError (base)
    ├── BackendError                 raised inside a backend implementation
    ├── BackendInvocationError       one backend call failed (isolated, never raised)
    ├── MergeContractViolationError  merge function got malformed input (fatal)
    └── ConfigurationError           invalid construction or settings (fatal)

Only MergeContractViolationError and ConfigurationError ever reach a caller
of the federated backend. BackendInvocationError is the record the
orchestrator keeps for a failed backend call; the original exception is
chained as ``__cause__``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """Error codes for graph-federation exceptions.

    These codes identify error types consistently in logs and diagnostics.
    """

    FEDERATION_ERROR = "FEDERATION_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"
    BACKEND_INVOCATION_FAILED = "BACKEND_INVOCATION_FAILED"
    MERGE_CONTRACT_VIOLATION = "MERGE_CONTRACT_VIOLATION"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class GraphFederationError(Exception):
    """Base exception for all graph-federation errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.FEDERATION_ERROR,
        **kwargs: Any,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# Backend Errors
# =============================================================================


class BackendError(GraphFederationError):
    """A backend could not answer (network, parse or validation failure).

    Backend implementations raise this; the orchestrator isolates it.

    Attributes:
        backend_name: Optional name of the failing backend.
    """

    def __init__(
        self,
        message: str,
        backend_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code=ErrorCode.BACKEND_ERROR, **kwargs)
        self.backend_name = backend_name


class BackendInvocationError(GraphFederationError):
    """A single backend call failed during a federated operation.

    Never surfaced to the caller: the orchestrator logs it and records it
    on the backend's TaggedResult, with the payload marked absent.

    Attributes:
        backend_name: Registry name of the backend that failed.
        operation: Operation that was being invoked (e.g. "element_info").
    """

    def __init__(
        self,
        message: str,
        backend_name: str,
        operation: str,
        **kwargs: Any,
    ) -> None:
        """Initialize BackendInvocationError.

        Args:
            message: Error message.
            backend_name: Name of the failing backend.
            operation: Operation being invoked.
            **kwargs: Additional attributes.
        """
        super().__init__(
            message,
            error_code=ErrorCode.BACKEND_INVOCATION_FAILED,
            **kwargs,
        )
        self.backend_name = backend_name
        self.operation = operation


# =============================================================================
# Fatal Errors
# =============================================================================


class MergeContractViolationError(GraphFederationError):
    """A merge function received malformed input or raised.

    Signals a bug in a collaborator rather than a transient fault, so it
    propagates to the caller.

    Attributes:
        operation: Operation whose merge failed.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            error_code=ErrorCode.MERGE_CONTRACT_VIOLATION,
            **kwargs,
        )
        self.operation = operation


class ConfigurationError(GraphFederationError):
    """Federation configuration is invalid.

    Raised at construction time for an empty backend list, an unknown merge
    policy, duplicate backend names or a backend missing an operation.

    Attributes:
        setting: Name of the problematic setting.
    """

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Error message.
            setting: Name of the problematic setting.
            **kwargs: Additional attributes.
        """
        super().__init__(
            message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            **kwargs,
        )
        self.setting = setting
