from __future__ import annotations

from typing import Optional

from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.selectors import FieldEquals, FilterSpec, TextSearch

SEARCH_FIELDS = ("address_line", "city", "district", "ward", "phone_number", "full_address")


class AddressFilters(FilterModel):
    """Local filters over one user's addresses; the endpoint takes none."""

    search: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    ward: Optional[str] = None
    is_default: Optional[bool] = None

    def to_spec(self) -> FilterSpec:
        return FilterSpec(
            predicates=(
                TextSearch(self.search, SEARCH_FIELDS),
                FieldEquals("city", self.city),
                FieldEquals("district", self.district),
                FieldEquals("ward", self.ward),
                FieldEquals("is_default", self.is_default),
            )
        )
