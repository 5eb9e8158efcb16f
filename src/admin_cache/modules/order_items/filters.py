from __future__ import annotations

from typing import Optional

from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.selectors import FieldEquals, FilterSpec, NumericRange, TextSearch


class OrderItemFilters(FilterModel):
    """Local filters over the items of one order; the endpoint takes none."""

    search: Optional[str] = None
    product_variant_id: Optional[int] = None
    min_quantity: Optional[int] = None
    max_quantity: Optional[int] = None

    def to_spec(self) -> FilterSpec:
        return FilterSpec(
            predicates=(
                TextSearch(self.search, ("product_name", "variant_name")),
                FieldEquals("product_variant_id", self.product_variant_id),
                NumericRange("quantity", self.min_quantity, self.max_quantity),
            )
        )
