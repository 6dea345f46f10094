"""Entity models shared by every backend and the federation layer.

All models are frozen: a record handed out by one backend can end up in a
merged result unchanged, and nothing downstream may edit it in place.

Identifiers (class, property, link type, element) are opaque strings,
unique within one backend's answers but not across backends.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


LinkDirection = Literal["in", "out"]

DEFAULT_FILTER_LIMIT = 100


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class LocalizedString(_FrozenModel):
    """A piece of text with an optional language tag."""

    text: str
    lang: str = ""


class ClassModel(_FrozenModel):
    """A class of the taxonomy with its subclasses.

    Attributes:
        id: Class identifier.
        labels: Localized labels.
        count: Number of instances, when the backend knows it.
        children: Direct subclasses.
    """

    id: str
    labels: list[LocalizedString] = Field(default_factory=list)
    count: int | None = None
    children: list["ClassModel"] = Field(default_factory=list)


class PropertyModel(_FrozenModel):
    """A datatype property."""

    id: str
    labels: list[LocalizedString] = Field(default_factory=list)


class LinkType(_FrozenModel):
    """A link (object property) type, with an optional usage count."""

    id: str
    labels: list[LocalizedString] = Field(default_factory=list)
    count: int | None = None


class ElementModel(_FrozenModel):
    """An element (instance) of the graph.

    Attributes:
        id: Element identifier.
        types: Ids of the classes the element belongs to.
        labels: Localized labels.
        image: Optional image URL.
        properties: Property id to localized values.
    """

    id: str
    types: list[str] = Field(default_factory=list)
    labels: list[LocalizedString] = Field(default_factory=list)
    image: str | None = None
    properties: dict[str, list[LocalizedString]] = Field(default_factory=dict)


class LinkModel(_FrozenModel):
    """A directed, typed link between two elements."""

    link_type_id: str
    source_id: str
    target_id: str
    properties: dict[str, list[LocalizedString]] = Field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str, str]:
        """Identity of the link: (link_type_id, source_id, target_id)."""
        return (self.link_type_id, self.source_id, self.target_id)


class LinkCount(_FrozenModel):
    """Incoming/outgoing link counts of one link type around an element."""

    id: str
    in_count: int = Field(default=0, ge=0)
    out_count: int = Field(default=0, ge=0)


class FilterParams(_FrozenModel):
    """Element search parameters.

    Attributes:
        element_type_id: Only elements of this class.
        text: Case-insensitive text to look for in labels.
        ref_element_id: Only elements linked to this element.
        ref_element_link_id: Only through links of this type.
        link_direction: Direction of the link as seen from ref_element_id.
        limit: Page size. 0 means the default page size.
        offset: Number of matches to skip.
        language_code: Preferred label language.
    """

    element_type_id: str | None = None
    text: str | None = None
    ref_element_id: str | None = None
    ref_element_link_id: str | None = None
    link_direction: LinkDirection | None = None
    limit: int = Field(default=DEFAULT_FILTER_LIMIT, ge=0)
    offset: int = Field(default=0, ge=0)
    language_code: str = ""

    @field_validator("limit")
    @classmethod
    def default_zero_limit(cls, v: int) -> int:
        """A limit of 0 falls back to the default page size."""
        return v or DEFAULT_FILTER_LIMIT


ClassModel.model_rebuild()
