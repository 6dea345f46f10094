"""Per-backend results collected during one federated operation."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from graphfed.core.exceptions import BackendInvocationError


T = TypeVar("T")


@dataclass(frozen=True)
class TaggedResult(Generic[T]):
    """A backend's answer to one call, labeled with the backend's name.

    Attributes:
        source_name: Registry name of the backend.
        payload: The answer, or None when the backend failed or answered nothing.
        error: The isolated failure, if the call raised.
    """

    source_name: str
    payload: T | None = None
    error: BackendInvocationError | None = None

    @property
    def is_absent(self) -> bool:
        """True when this backend contributes nothing."""
        return self.payload is None
