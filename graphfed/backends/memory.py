"""In-memory backend.

InMemoryBackend answers every BackendCapability operation from data held
in memory. It is the local counterpart of remote backends: a federation
typically puts one in front of (or behind) a remote knowledge store, e.g.
to hold a locally edited ontology.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from graphfed.backends.base import BackendCapability
from graphfed.core.exceptions import BackendError
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


class Snapshot(BaseModel):
    """Plain-data content of an InMemoryBackend, validated on load."""

    classes: list[ClassModel] = Field(default_factory=list)
    properties: list[PropertyModel] = Field(default_factory=list)
    link_types: list[LinkType] = Field(default_factory=list)
    elements: list[ElementModel] = Field(default_factory=list)
    links: list[LinkModel] = Field(default_factory=list)


def _walk(classes: Iterable[ClassModel]) -> Iterable[ClassModel]:
    for class_model in classes:
        yield class_model
        yield from _walk(class_model.children)


class InMemoryBackend(BackendCapability):
    """Backend serving a fixed in-memory graph.

    Attributes:
        name: Label used in this backend's error messages.

    Example:
        backend = InMemoryBackend.from_snapshot({
            "classes": [{"id": "Person"}],
            "elements": [{"id": "alice", "types": ["Person"]}],
        })
        elements = await backend.element_info(["alice"])
    """

    def __init__(
        self,
        classes: Iterable[ClassModel] = (),
        properties: Iterable[PropertyModel] = (),
        link_types: Iterable[LinkType] = (),
        elements: Iterable[ElementModel] = (),
        links: Iterable[LinkModel] = (),
        name: str = "memory",
    ) -> None:
        """Initialize the backend.

        Args:
            classes: Root classes of the taxonomy, subclasses nested.
            properties: Datatype properties.
            link_types: Link type catalog.
            elements: Elements, in the order filter() pages through them.
            links: Links between elements.
            name: Label used in error messages.
        """
        self.name = name
        self._roots = list(classes)
        self._classes = {c.id: c for c in _walk(self._roots)}
        self._properties = {p.id: p for p in properties}
        self._link_types = {lt.id: lt for lt in link_types}
        self._elements = {e.id: e for e in elements}
        unique_links: dict[tuple[str, str, str], LinkModel] = {}
        for link in links:
            unique_links.setdefault(link.key, link)
        self._links = list(unique_links.values())

    @classmethod
    def from_snapshot(
        cls, snapshot: Mapping[str, Any], name: str = "memory"
    ) -> "InMemoryBackend":
        """Build a backend from plain data (e.g. parsed JSON).

        Raises:
            pydantic.ValidationError: If the snapshot is malformed.
        """
        data = Snapshot.model_validate(snapshot)
        return cls(
            classes=data.classes,
            properties=data.properties,
            link_types=data.link_types,
            elements=data.elements,
            links=data.links,
            name=name,
        )

    # -------------------------------------------------------------------------
    # Catalog operations
    # -------------------------------------------------------------------------

    async def class_tree(self) -> list[ClassModel]:
        return list(self._roots)

    async def link_types(self) -> list[LinkType]:
        return list(self._link_types.values())

    # -------------------------------------------------------------------------
    # Lookup operations
    # -------------------------------------------------------------------------

    async def class_info(self, class_ids: list[str]) -> list[ClassModel]:
        return [self._classes[i] for i in dict.fromkeys(class_ids) if i in self._classes]

    async def property_info(self, property_ids: list[str]) -> dict[str, PropertyModel]:
        return {i: self._properties[i] for i in property_ids if i in self._properties}

    async def link_types_info(self, link_type_ids: list[str]) -> list[LinkType]:
        return [
            self._link_types[i]
            for i in dict.fromkeys(link_type_ids)
            if i in self._link_types
        ]

    async def element_info(self, element_ids: list[str]) -> dict[str, ElementModel]:
        return {i: self._elements[i] for i in element_ids if i in self._elements}

    async def links_info(
        self, element_ids: list[str], link_type_ids: list[str]
    ) -> list[LinkModel]:
        wanted = set(element_ids)
        types = set(link_type_ids)
        return [
            link
            for link in self._links
            if link.source_id in wanted
            and link.target_id in wanted
            and (not types or link.link_type_id in types)
        ]

    # -------------------------------------------------------------------------
    # Neighbourhood operations
    # -------------------------------------------------------------------------

    async def link_types_of(self, element_id: str) -> list[LinkCount]:
        counts: dict[str, list[int]] = {}
        for link in self._links:
            if link.source_id == element_id:
                counts.setdefault(link.link_type_id, [0, 0])[1] += 1
            if link.target_id == element_id:
                counts.setdefault(link.link_type_id, [0, 0])[0] += 1
        return [
            LinkCount(id=type_id, in_count=in_count, out_count=out_count)
            for type_id, (in_count, out_count) in counts.items()
        ]

    async def link_elements(
        self,
        element_id: str,
        link_id: str,
        limit: int,
        offset: int,
        direction: LinkDirection | None = None,
    ) -> dict[str, ElementModel]:
        return await self.filter(
            FilterParams(
                ref_element_id=element_id,
                ref_element_link_id=link_id,
                link_direction=direction,
                limit=limit,
                offset=offset,
            )
        )

    async def filter(self, params: FilterParams) -> dict[str, ElementModel]:
        if params.ref_element_link_id and not params.ref_element_id:
            raise BackendError(
                "Can't filter by reference link without a reference element",
                backend_name=self.name,
            )

        candidates: Iterable[ElementModel] = self._elements.values()
        if params.ref_element_id:
            linked = self._linked_ids(
                params.ref_element_id,
                params.ref_element_link_id,
                params.link_direction,
            )
            candidates = (e for e in candidates if e.id in linked)
        if params.element_type_id:
            candidates = (e for e in candidates if params.element_type_id in e.types)
        if params.text:
            needle = params.text.lower()
            candidates = (e for e in candidates if _matches_text(e, needle))

        matches = list(candidates)[params.offset : params.offset + params.limit]
        return {e.id: e for e in matches}

    def _linked_ids(
        self,
        element_id: str,
        link_type_id: str | None,
        direction: LinkDirection | None,
    ) -> set[str]:
        linked: set[str] = set()
        for link in self._links:
            if link_type_id and link.link_type_id != link_type_id:
                continue
            if direction != "in" and link.source_id == element_id:
                linked.add(link.target_id)
            if direction != "out" and link.target_id == element_id:
                linked.add(link.source_id)
        return linked


def _matches_text(element: ElementModel, needle: str) -> bool:
    if needle in element.id.lower():
        return True
    return any(needle in label.text.lower() for label in element.labels)
