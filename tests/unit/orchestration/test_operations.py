"""Unit tests for the operation dispatch table."""

import pytest
from pydantic import ValidationError

from graphfed.backends.base import BACKEND_OPERATIONS
from graphfed.orchestration.operations import (
    OPERATIONS,
    ClassInfoRequest,
    ElementInfoRequest,
    LinkElementsRequest,
    LinksInfoRequest,
    OperationKind,
    OperationShape,
    is_empty,
)
from tests.unit.backends.fake_backend import FakeBackend
from tests.unit.factories import make_class, make_element, make_link


class TestTable:
    def test_every_backend_operation_has_a_spec(self) -> None:
        assert {kind.value for kind in OPERATIONS} == set(BACKEND_OPERATIONS)

    @pytest.mark.parametrize(
        "kind, shape",
        [
            (OperationKind.CLASS_TREE, OperationShape.CATALOG),
            (OperationKind.LINK_TYPES, OperationShape.CATALOG),
            (OperationKind.CLASS_INFO, OperationShape.NARROWABLE),
            (OperationKind.PROPERTY_INFO, OperationShape.NARROWABLE),
            (OperationKind.LINK_TYPES_INFO, OperationShape.NARROWABLE),
            (OperationKind.ELEMENT_INFO, OperationShape.NARROWABLE),
            (OperationKind.LINKS_INFO, OperationShape.NARROWABLE),
            (OperationKind.LINK_TYPES_OF, OperationShape.BINARY),
            (OperationKind.LINK_ELEMENTS, OperationShape.BINARY),
            (OperationKind.FILTER, OperationShape.BINARY),
        ],
    )
    def test_shapes(self, kind: OperationKind, shape: OperationShape) -> None:
        assert OPERATIONS[kind].shape is shape

    def test_only_narrowable_operations_narrow(self) -> None:
        for spec in OPERATIONS.values():
            assert (spec.narrow is not None) == (spec.shape is OperationShape.NARROWABLE)


class TestRequests:
    def test_requests_are_frozen(self) -> None:
        request = ElementInfoRequest(element_ids=("a",))
        with pytest.raises(ValidationError):
            request.element_ids = ("b",)

    def test_direction_validated(self) -> None:
        with pytest.raises(ValidationError):
            LinkElementsRequest(
                element_id="a", link_id="knows", limit=10, offset=0, direction="up"
            )


class TestNarrowing:
    def test_drops_resolved_keys(self) -> None:
        narrow = OPERATIONS[OperationKind.ELEMENT_INFO].narrow
        request = ElementInfoRequest(element_ids=("1", "2", "3"))

        narrowed = narrow(request, {"1": make_element("1"), "2": make_element("2")})

        assert isinstance(narrowed, ElementInfoRequest)
        assert narrowed.element_ids == ("3",)
        assert request.element_ids == ("1", "2", "3")

    def test_none_when_everything_resolved(self) -> None:
        narrow = OPERATIONS[OperationKind.CLASS_INFO].narrow
        request = ClassInfoRequest(class_ids=("Person",))
        assert narrow(request, [make_class("Person")]) is None

    def test_nothing_resolved_keeps_request(self) -> None:
        narrow = OPERATIONS[OperationKind.CLASS_INFO].narrow
        request = ClassInfoRequest(class_ids=("Person", "Place"))
        assert narrow(request, []).class_ids == ("Person", "Place")

    def test_links_narrowed_by_source_ids(self) -> None:
        narrow = OPERATIONS[OperationKind.LINKS_INFO].narrow
        request = LinksInfoRequest(element_ids=("a", "b", "c"), link_type_ids=("knows",))

        narrowed = narrow(request, [make_link("knows", "a", "b")])

        assert narrowed.element_ids == ("b", "c")
        assert narrowed.link_type_ids == ("knows",)


class TestInvoke:
    async def test_backend_receives_list_copy(self) -> None:
        backend = FakeBackend()
        request = ElementInfoRequest(element_ids=("a", "b"))

        await OPERATIONS[OperationKind.ELEMENT_INFO].invoke(backend, request)

        ((ids,),) = backend.calls_to("element_info")
        assert ids == ["a", "b"]
        ids.append("mutated")
        assert request.element_ids == ("a", "b")

    async def test_link_elements_passes_every_argument(self) -> None:
        backend = FakeBackend()
        request = LinkElementsRequest(
            element_id="a", link_id="knows", limit=5, offset=10, direction="in"
        )

        await OPERATIONS[OperationKind.LINK_ELEMENTS].invoke(backend, request)

        assert backend.calls_to("link_elements") == [("a", "knows", 5, 10, "in")]


class TestIsEmpty:
    @pytest.mark.parametrize("answer", [None, [], {}])
    def test_empty(self, answer: object) -> None:
        assert is_empty(answer)

    @pytest.mark.parametrize("answer", [[make_element("a")], {"a": make_element("a")}, 0])
    def test_not_empty(self, answer: object) -> None:
        assert not is_empty(answer)
