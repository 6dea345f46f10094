"""Dispatch table of federated operations.

Every BackendCapability operation has an OperationSpec describing how the
federation handles it:

- shape: CATALOG (whole-catalog fetch, always fanned out to every backend),
  NARROWABLE (id-set lookup whose request can shrink from backend to
  backend) or BINARY (found-or-empty answer, first success wins when
  fetching sequentially)
- invoke: how to call one backend with an immutable request snapshot
- merge: the operation's merge function
- narrow: for NARROWABLE operations, the request left to send given what
  has been resolved so far, or None when nothing is left
"""

from collections.abc import Awaitable, Callable, Collection, Mapping, Sized
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from graphfed.backends.base import BackendCapability
from graphfed.models.entities import FilterParams, LinkDirection
from graphfed.orchestration import merge
from graphfed.orchestration.merge import MergeFunction


class OperationKind(str, Enum):
    """Operations of the backend interface, valued by method name."""

    CLASS_TREE = "class_tree"
    CLASS_INFO = "class_info"
    PROPERTY_INFO = "property_info"
    LINK_TYPES_INFO = "link_types_info"
    LINK_TYPES = "link_types"
    ELEMENT_INFO = "element_info"
    LINKS_INFO = "links_info"
    LINK_TYPES_OF = "link_types_of"
    LINK_ELEMENTS = "link_elements"
    FILTER = "filter"


class OperationShape(Enum):
    """How an operation's request and answer relate across backends."""

    CATALOG = "catalog"
    NARROWABLE = "narrowable"
    BINARY = "binary"


# =============================================================================
# Request snapshots
# =============================================================================


class OperationRequest(BaseModel):
    """Immutable arguments of one operation call."""

    model_config = ConfigDict(frozen=True)


class CatalogRequest(OperationRequest):
    pass


class ClassInfoRequest(OperationRequest):
    class_ids: tuple[str, ...]


class PropertyInfoRequest(OperationRequest):
    property_ids: tuple[str, ...]


class LinkTypesInfoRequest(OperationRequest):
    link_type_ids: tuple[str, ...]


class ElementInfoRequest(OperationRequest):
    element_ids: tuple[str, ...]


class LinksInfoRequest(OperationRequest):
    element_ids: tuple[str, ...]
    link_type_ids: tuple[str, ...]


class LinkTypesOfRequest(OperationRequest):
    element_id: str


class LinkElementsRequest(OperationRequest):
    element_id: str
    link_id: str
    limit: int
    offset: int
    direction: LinkDirection | None = None


class FilterRequest(OperationRequest):
    params: FilterParams


# =============================================================================
# Narrowing
# =============================================================================

Narrower = Callable[[OperationRequest, Any], OperationRequest | None]


def _narrow(
    field: str, resolved: Callable[[Any], Collection[str]]
) -> Narrower:
    """Build a narrower that drops already-resolved ids from ``field``."""

    def narrow(request: OperationRequest, accumulated: Any) -> OperationRequest | None:
        done = resolved(accumulated)
        remaining = tuple(i for i in getattr(request, field) if i not in done)
        if not remaining:
            return None
        return request.model_copy(update={field: remaining})

    return narrow


def _ids_of(records: list[Any]) -> set[str]:
    return {record.id for record in records}


def _keys_of(records: Mapping[str, Any]) -> Collection[str]:
    return records.keys()


def _link_sources_of(links: list[Any]) -> set[str]:
    return {link.source_id for link in links}


def is_empty(answer: Any) -> bool:
    """True for an absent or empty answer."""
    return answer is None or (isinstance(answer, Sized) and len(answer) == 0)


# =============================================================================
# Operation specs
# =============================================================================


@dataclass(frozen=True)
class OperationSpec:
    """How the federation runs one operation.

    Attributes:
        kind: The operation.
        shape: CATALOG, NARROWABLE or BINARY.
        invoke: Calls one backend with a request snapshot.
        merge: Merge function for the operation's tagged results.
        narrow: Narrowing rule (NARROWABLE operations only).
    """

    kind: OperationKind
    shape: OperationShape
    invoke: Callable[[BackendCapability, Any], Awaitable[Any]]
    merge: MergeFunction
    narrow: Narrower | None = None


OPERATIONS: dict[OperationKind, OperationSpec] = {
    spec.kind: spec
    for spec in (
        OperationSpec(
            kind=OperationKind.CLASS_TREE,
            shape=OperationShape.CATALOG,
            invoke=lambda backend, _request: backend.class_tree(),
            merge=merge.merge_class_tree,
        ),
        OperationSpec(
            kind=OperationKind.LINK_TYPES,
            shape=OperationShape.CATALOG,
            invoke=lambda backend, _request: backend.link_types(),
            merge=merge.merge_link_types,
        ),
        OperationSpec(
            kind=OperationKind.CLASS_INFO,
            shape=OperationShape.NARROWABLE,
            invoke=lambda backend, request: backend.class_info(list(request.class_ids)),
            merge=merge.merge_class_info,
            narrow=_narrow("class_ids", _ids_of),
        ),
        OperationSpec(
            kind=OperationKind.PROPERTY_INFO,
            shape=OperationShape.NARROWABLE,
            invoke=lambda backend, request: backend.property_info(
                list(request.property_ids)
            ),
            merge=merge.merge_property_info,
            narrow=_narrow("property_ids", _keys_of),
        ),
        OperationSpec(
            kind=OperationKind.LINK_TYPES_INFO,
            shape=OperationShape.NARROWABLE,
            invoke=lambda backend, request: backend.link_types_info(
                list(request.link_type_ids)
            ),
            merge=merge.merge_link_types_info,
            narrow=_narrow("link_type_ids", _ids_of),
        ),
        OperationSpec(
            kind=OperationKind.ELEMENT_INFO,
            shape=OperationShape.NARROWABLE,
            invoke=lambda backend, request: backend.element_info(
                list(request.element_ids)
            ),
            merge=merge.merge_element_info,
            narrow=_narrow("element_ids", _keys_of),
        ),
        OperationSpec(
            kind=OperationKind.LINKS_INFO,
            shape=OperationShape.NARROWABLE,
            invoke=lambda backend, request: backend.links_info(
                list(request.element_ids), list(request.link_type_ids)
            ),
            merge=merge.merge_links_info,
            narrow=_narrow("element_ids", _link_sources_of),
        ),
        OperationSpec(
            kind=OperationKind.LINK_TYPES_OF,
            shape=OperationShape.BINARY,
            invoke=lambda backend, request: backend.link_types_of(request.element_id),
            merge=merge.merge_link_types_of,
        ),
        OperationSpec(
            kind=OperationKind.LINK_ELEMENTS,
            shape=OperationShape.BINARY,
            invoke=lambda backend, request: backend.link_elements(
                request.element_id,
                request.link_id,
                request.limit,
                request.offset,
                request.direction,
            ),
            merge=merge.merge_link_elements,
        ),
        OperationSpec(
            kind=OperationKind.FILTER,
            shape=OperationShape.BINARY,
            invoke=lambda backend, request: backend.filter(request.params),
            merge=merge.merge_filter,
        ),
    )
}
