"""Merge functions - one per backend operation.

Each merge function takes the TaggedResults of one federated call, in
registry order, and returns the unified answer:

- Dictionary results (id -> record): the first backend in registry order
  that produced a key wins; later values for the key are dropped.
- List results: concatenated in registry order, deduplicated by id (links
  by their full (type, source, target) triple), first occurrence kept.
- Link counts: merged by link type id, first backend wins, never summed.
- Class tree: roots merged by id with the first-wins rule; the children of
  one class id are merged the same way, recursively.

Absent payloads contribute nothing, so merging only failures gives an empty
list or dict. A payload of the wrong shape raises
MergeContractViolationError.
"""

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, TypeVar

from graphfed.core.exceptions import MergeContractViolationError
from graphfed.models.entities import (
    ClassModel,
    ElementModel,
    LinkCount,
    LinkModel,
    LinkType,
    PropertyModel,
)
from graphfed.models.results import TaggedResult


R = TypeVar("R", ClassModel, PropertyModel, LinkType, ElementModel, LinkModel, LinkCount)

MergeFunction = Callable[[Sequence[TaggedResult[Any]]], Any]


# =============================================================================
# Shape checks
# =============================================================================


def _list_payloads(
    results: Sequence[TaggedResult[Any]], record_type: type[R], operation: str
) -> Iterator[R]:
    """Yield records of every present list payload, in registry order."""
    for result in results:
        if result.is_absent:
            continue
        if not isinstance(result.payload, list):
            raise MergeContractViolationError(
                f"{operation}: backend '{result.source_name}' returned "
                f"{type(result.payload).__name__}, expected list",
                operation=operation,
            )
        for record in result.payload:
            if not isinstance(record, record_type):
                raise MergeContractViolationError(
                    f"{operation}: backend '{result.source_name}' returned a "
                    f"{type(record).__name__} item, expected {record_type.__name__}",
                    operation=operation,
                )
            yield record


def _dict_payloads(
    results: Sequence[TaggedResult[Any]], record_type: type[R], operation: str
) -> Iterator[tuple[str, R]]:
    """Yield (key, record) pairs of every present mapping payload, in registry order."""
    for result in results:
        if result.is_absent:
            continue
        if not isinstance(result.payload, Mapping):
            raise MergeContractViolationError(
                f"{operation}: backend '{result.source_name}' returned "
                f"{type(result.payload).__name__}, expected mapping",
                operation=operation,
            )
        for key, record in result.payload.items():
            if not isinstance(record, record_type):
                raise MergeContractViolationError(
                    f"{operation}: backend '{result.source_name}' returned a "
                    f"{type(record).__name__} value for '{key}', "
                    f"expected {record_type.__name__}",
                    operation=operation,
                )
            yield key, record


# =============================================================================
# Generic combinators
# =============================================================================


def merge_dictionaries(
    results: Sequence[TaggedResult[Any]], record_type: type[R], operation: str
) -> dict[str, R]:
    """Union of mapping payloads, first backend wins per key."""
    merged: dict[str, R] = {}
    for key, record in _dict_payloads(results, record_type, operation):
        merged.setdefault(key, record)
    return merged


def merge_lists_by_id(
    results: Sequence[TaggedResult[Any]], record_type: type[R], operation: str
) -> list[R]:
    """Concatenation of list payloads, deduplicated by ``id``, first kept."""
    merged: dict[str, R] = {}
    for record in _list_payloads(results, record_type, operation):
        merged.setdefault(record.id, record)
    return list(merged.values())


def _merge_class_forest(forests: Iterator[list[ClassModel]]) -> list[ClassModel]:
    first: dict[str, ClassModel] = {}
    children: dict[str, list[list[ClassModel]]] = {}
    for forest in forests:
        for class_model in forest:
            first.setdefault(class_model.id, class_model)
            children.setdefault(class_model.id, []).append(class_model.children)

    merged: list[ClassModel] = []
    for class_id, class_model in first.items():
        sub_forests = children[class_id]
        if len(sub_forests) == 1:
            merged.append(class_model)
        else:
            merged.append(
                class_model.model_copy(
                    update={"children": _merge_class_forest(iter(sub_forests))}
                )
            )
    return merged


# =============================================================================
# Per-operation merge functions
# =============================================================================


def merge_class_tree(results: Sequence[TaggedResult[Any]]) -> list[ClassModel]:
    """Merge class taxonomies.

    A class present in several backends keeps the first backend's record,
    with the children of every backend merged under it.
    """
    forests = [
        list(_list_payloads([result], ClassModel, "class_tree"))
        for result in results
        if not result.is_absent
    ]
    return _merge_class_forest(iter(forests))


def merge_class_info(results: Sequence[TaggedResult[Any]]) -> list[ClassModel]:
    return merge_lists_by_id(results, ClassModel, "class_info")


def merge_property_info(
    results: Sequence[TaggedResult[Any]],
) -> dict[str, PropertyModel]:
    return merge_dictionaries(results, PropertyModel, "property_info")


def merge_link_types_info(results: Sequence[TaggedResult[Any]]) -> list[LinkType]:
    return merge_lists_by_id(results, LinkType, "link_types_info")


def merge_link_types(results: Sequence[TaggedResult[Any]]) -> list[LinkType]:
    return merge_lists_by_id(results, LinkType, "link_types")


def merge_element_info(
    results: Sequence[TaggedResult[Any]],
) -> dict[str, ElementModel]:
    return merge_dictionaries(results, ElementModel, "element_info")


def merge_links_info(results: Sequence[TaggedResult[Any]]) -> list[LinkModel]:
    """Concatenate links, dropping repeats of the same (type, source, target)."""
    merged: dict[tuple[str, str, str], LinkModel] = {}
    for link in _list_payloads(results, LinkModel, "links_info"):
        merged.setdefault(link.key, link)
    return list(merged.values())


def merge_link_types_of(results: Sequence[TaggedResult[Any]]) -> list[LinkCount]:
    """Merge link counts by link type id; a backend's count is never summed."""
    return merge_lists_by_id(results, LinkCount, "link_types_of")


def merge_link_elements(
    results: Sequence[TaggedResult[Any]],
) -> dict[str, ElementModel]:
    return merge_dictionaries(results, ElementModel, "link_elements")


def merge_filter(results: Sequence[TaggedResult[Any]]) -> dict[str, ElementModel]:
    return merge_dictionaries(results, ElementModel, "filter")
