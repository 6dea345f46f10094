"""Base classes for graph data backends.

Defines the BackendCapability ABC that every data backend, local or
remote, implements, and BackendDefinition, the named registration of one
backend inside a federation.

Patterns applied:
- ABC with @abstractmethod decorator
- Frozen dataclass for the immutable registration record
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

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


BACKEND_OPERATIONS: tuple[str, ...] = (
    "class_tree",
    "class_info",
    "property_info",
    "link_types_info",
    "link_types",
    "element_info",
    "links_info",
    "link_types_of",
    "link_elements",
    "filter",
)


class BackendCapability(ABC):
    """Abstract base class for graph data backends.

    This is the "port" of the federation layer: the federated backend
    consumes it from every registered backend and implements it itself, so
    a federation can stand wherever a single backend is expected.

    Every operation is asynchronous and may fail. Implementations raise
    BackendError for network, parse or validation failures; a backend may
    also return None to signal that it has no answer.

    Example:
        class SparqlBackend(BackendCapability):
            async def element_info(self, element_ids):
                rows = await self._select(element_ids)
                return {row.id: row.to_element() for row in rows}
            ...
    """

    @abstractmethod
    async def class_tree(self) -> list[ClassModel]:
        """Fetch the whole class taxonomy.

        Returns:
            Root classes, each with its subclasses nested in ``children``.
        """
        ...

    @abstractmethod
    async def class_info(self, class_ids: list[str]) -> list[ClassModel]:
        """Fetch the given classes.

        Args:
            class_ids: Ids of the classes to describe.

        Returns:
            The classes this backend knows among class_ids.
        """
        ...

    @abstractmethod
    async def property_info(self, property_ids: list[str]) -> dict[str, PropertyModel]:
        """Fetch the given datatype properties, keyed by id."""
        ...

    @abstractmethod
    async def link_types_info(self, link_type_ids: list[str]) -> list[LinkType]:
        """Fetch the given link types."""
        ...

    @abstractmethod
    async def link_types(self) -> list[LinkType]:
        """Fetch the whole link type catalog."""
        ...

    @abstractmethod
    async def element_info(self, element_ids: list[str]) -> dict[str, ElementModel]:
        """Fetch the given elements, keyed by id."""
        ...

    @abstractmethod
    async def links_info(
        self, element_ids: list[str], link_type_ids: list[str]
    ) -> list[LinkModel]:
        """Fetch links between the given elements.

        Args:
            element_ids: Elements whose mutual links are wanted.
            link_type_ids: Restrict to these link types (all when empty).

        Returns:
            Links whose source and target are both among element_ids.
        """
        ...

    @abstractmethod
    async def link_types_of(self, element_id: str) -> list[LinkCount]:
        """Count links around one element, per link type."""
        ...

    @abstractmethod
    async def link_elements(
        self,
        element_id: str,
        link_id: str,
        limit: int,
        offset: int,
        direction: LinkDirection | None = None,
    ) -> dict[str, ElementModel]:
        """Fetch a page of elements linked to ``element_id`` through ``link_id``.

        Args:
            element_id: Element on the other end of the links.
            link_id: Link type to follow.
            limit: Page size.
            offset: Number of elements to skip.
            direction: "out" for targets of element_id, "in" for sources,
                None for both.
        """
        ...

    @abstractmethod
    async def filter(self, params: FilterParams) -> dict[str, ElementModel]:
        """Search elements, keyed by id."""
        ...


@dataclass(frozen=True)
class BackendDefinition:
    """A backend registered under a name.

    The name is unique within a registry and is used for logging, tracing
    and result tagging only, never for merge decisions.

    Attributes:
        name: Registry name.
        backend: The backend itself.
    """

    name: str
    backend: BackendCapability
