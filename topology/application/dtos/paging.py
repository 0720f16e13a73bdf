"""Paging primitives: page request (PageLink) and page result (PageData)."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from topology.domain.enums import SortOrder
from topology.domain.exceptions import ValidationException

# Sort keys the entity stores know how to order by.
SORTABLE_PROPERTIES = frozenset({"name", "type", "created_at"})

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PageLink:
    """Page request: page index (0-based), size, optional text search and sort."""

    page_size: int
    page: int = 0
    text_search: str | None = None
    sort_property: str | None = None
    sort_order: SortOrder = SortOrder.ASC

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValidationException("page_size must be at least 1", field="page_size")
        if self.page < 0:
            raise ValidationException("page must not be negative", field="page")
        if self.sort_property and self.sort_property not in SORTABLE_PROPERTIES:
            raise ValidationException(
                f"Cannot sort by '{self.sort_property}'. "
                f"Allowed: {', '.join(sorted(SORTABLE_PROPERTIES))}",
                field="sort_property",
            )

    @property
    def offset(self) -> int:
        return self.page * self.page_size


@dataclass(frozen=True)
class PageData(Generic[T]):
    """One page of results plus totals for the whole query."""

    data: list[T] = field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    has_next: bool = False

    @classmethod
    def of(cls, data: list[T], total_elements: int, page_link: PageLink) -> "PageData[T]":
        """Build a page from one slice of results and the total match count."""
        total_pages = -(-total_elements // page_link.page_size) if total_elements else 0
        return cls(
            data=data,
            total_pages=total_pages,
            total_elements=total_elements,
            has_next=page_link.page + 1 < total_pages,
        )

    def map(self, fn: Callable[[T], R]) -> "PageData[R]":
        """Return a page with fn applied to every item; totals unchanged."""
        return PageData(
            data=[fn(item) for item in self.data],
            total_pages=self.total_pages,
            total_elements=self.total_elements,
            has_next=self.has_next,
        )
