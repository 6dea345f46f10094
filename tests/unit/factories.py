"""Entity factories shared by unit tests."""

from graphfed.models.entities import (
    ClassModel,
    ElementModel,
    LinkCount,
    LinkModel,
    LinkType,
    LocalizedString,
    PropertyModel,
)


def label(text: str, lang: str = "en") -> list[LocalizedString]:
    """Build a single-label list."""
    return [LocalizedString(text=text, lang=lang)]


def make_element(element_id: str, text: str | None = None, *types: str) -> ElementModel:
    """Build an element with one label."""
    return ElementModel(id=element_id, types=list(types), labels=label(text or element_id))


def make_class(class_id: str, *children: ClassModel, text: str | None = None) -> ClassModel:
    """Build a class with optional subclasses."""
    return ClassModel(id=class_id, labels=label(text or class_id), children=list(children))


def make_link_type(link_type_id: str, text: str | None = None) -> LinkType:
    return LinkType(id=link_type_id, labels=label(text or link_type_id))


def make_property(property_id: str, text: str | None = None) -> PropertyModel:
    return PropertyModel(id=property_id, labels=label(text or property_id))


def make_link(link_type_id: str, source_id: str, target_id: str) -> LinkModel:
    return LinkModel(link_type_id=link_type_id, source_id=source_id, target_id=target_id)


def make_count(link_type_id: str, in_count: int = 0, out_count: int = 0) -> LinkCount:
    return LinkCount(id=link_type_id, in_count=in_count, out_count=out_count)
