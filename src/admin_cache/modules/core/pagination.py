"""Server-paginated collection value objects.

``Page`` stores only what the server is authoritative for (content,
total element count, page size, page index).  ``total_pages``,
``first``, ``last`` and ``empty`` are computed on access, so every
instance, including a patched copy produced by the mutation protocol,
satisfies::

    total_pages == ceil(total_elements / size)   (0 when size == 0)
    first == (number == 0)
    last == (number >= total_pages - 1)
    empty == (len(content) == 0)

Server-supplied values for the derived fields are ignored on input.
"""

from __future__ import annotations

import math
from typing import Dict, Generic, Optional, Tuple, TypeVar

from pydantic import Field, computed_field

from admin_cache.config import settings
from admin_cache.modules.core.dtos import WireModel

T = TypeVar("T")

SORT_DIRECTIONS = ("asc", "desc")


class Page(WireModel, Generic[T]):
    """One server page of a collection."""

    content: Tuple[T, ...] = ()
    total_elements: int = Field(default=0, ge=0)
    size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=0)
    number: int = Field(default=0, ge=0)

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.size == 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @computed_field
    @property
    def first(self) -> bool:
        return self.number == 0

    @computed_field
    @property
    def last(self) -> bool:
        return self.number >= self.total_pages - 1

    @computed_field
    @property
    def empty(self) -> bool:
        return len(self.content) == 0


class PageRequest(WireModel):
    """Pagination and server-side sort parameters for a list fetch."""

    page: int = Field(default=0, ge=0)
    size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)
    sort: Optional[str] = None

    @classmethod
    def sorted_by(
        cls, field: str, direction: str = "asc", page: int = 0, size: Optional[int] = None
    ) -> PageRequest:
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be one of {SORT_DIRECTIONS}.")
        kwargs = {"page": page, "sort": f"{field},{direction}"}
        if size is not None:
            kwargs["size"] = size
        return cls(**kwargs)

    def to_params(self, default_sort: Optional[str] = None) -> Dict[str, str]:
        params = {"page": str(self.page), "size": str(self.size)}
        sort = self.sort or default_sort
        if sort:
            params["sort"] = sort
        return params


class PageInfo(WireModel):
    """Pagination metadata for the pager widget."""

    total_pages: int
    total_elements: int
    size: int
    number: int
    first: bool
    last: bool
    empty: bool
    has_next: bool
    has_previous: bool

    @classmethod
    def from_page(cls, page: Page) -> PageInfo:
        return cls(
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            size=page.size,
            number=page.number,
            first=page.first,
            last=page.last,
            empty=page.empty,
            has_next=not page.last,
            has_previous=not page.first,
        )
