"""Data models for graph-federation.

Modules:
- entities: classes, properties, link types, elements, links, filter params
- results: TaggedResult
"""

from graphfed.models.entities import (
    DEFAULT_FILTER_LIMIT,
    ClassModel,
    ElementModel,
    FilterParams,
    LinkCount,
    LinkDirection,
    LinkModel,
    LinkType,
    LocalizedString,
    PropertyModel,
)
from graphfed.models.results import TaggedResult


__all__: list[str] = [
    "DEFAULT_FILTER_LIMIT",
    "ClassModel",
    "ElementModel",
    "FilterParams",
    "LinkCount",
    "LinkDirection",
    "LinkModel",
    "LinkType",
    "LocalizedString",
    "PropertyModel",
    "TaggedResult",
]
