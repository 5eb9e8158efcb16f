from __future__ import annotations

from typing import ClassVar, Optional, Tuple

from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.selectors import FieldEquals, FilterSpec, TextSearch

SEARCH_FIELDS = ("name", "description")


class BrandFilters(FilterModel):
    """Brand list filters: free-text search over name/description and status."""

    SERVER_FIELDS: ClassVar[Tuple[str, ...]] = ("search", "status")

    search: Optional[str] = None
    status: Optional[bool] = None

    def to_spec(self) -> FilterSpec:
        return FilterSpec(
            predicates=(
                TextSearch(self.search, SEARCH_FIELDS),
                FieldEquals("status", self.status),
            )
        )
