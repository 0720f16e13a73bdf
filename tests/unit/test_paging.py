"""PageLink validation and PageData totals."""

import pytest

from topology.application.dtos.paging import PageData, PageLink
from topology.domain.enums import SortOrder
from topology.domain.exceptions import ValidationException


class TestPageLink:
    def test_offset(self) -> None:
        assert PageLink(page_size=20, page=3).offset == 60

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"page_size": 0}, "page_size"),
            ({"page_size": 10, "page": -1}, "page"),
            ({"page_size": 10, "sort_property": "customer_id"}, "sort_property"),
        ],
    )
    def test_invalid_requests_rejected(self, kwargs: dict, field: str) -> None:
        with pytest.raises(ValidationException) as exc_info:
            PageLink(**kwargs)
        assert exc_info.value.details == {"field": field}

    def test_sortable_property_accepted(self) -> None:
        link = PageLink(page_size=5, sort_property="name", sort_order=SortOrder.DESC)
        assert link.sort_property == "name"


class TestPageData:
    def test_of_computes_totals(self) -> None:
        page = PageData.of(["a", "b"], total_elements=5, page_link=PageLink(page_size=2))
        assert page.total_pages == 3
        assert page.total_elements == 5
        assert page.has_next is True

    def test_last_page_has_no_next(self) -> None:
        page = PageData.of(["e"], total_elements=5, page_link=PageLink(page_size=2, page=2))
        assert page.has_next is False

    def test_empty(self) -> None:
        page = PageData.of([], total_elements=0, page_link=PageLink(page_size=10))
        assert page.data == []
        assert page.total_pages == 0
        assert page.has_next is False

    def test_map_keeps_totals(self) -> None:
        page = PageData.of([1, 2], total_elements=4, page_link=PageLink(page_size=2))
        mapped = page.map(str)
        assert mapped.data == ["1", "2"]
        assert (mapped.total_pages, mapped.total_elements, mapped.has_next) == (2, 4, True)
