from __future__ import annotations

from typing import ClassVar, Optional, Tuple

from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.selectors import FieldEquals, FilterSpec, NumericRange, TextSearch


class VariantFilters(FilterModel):
    """Variant list filters.

    ``size`` is never sent to the server: the list endpoint reads the
    ``size`` query parameter as the page length.
    """

    SERVER_FIELDS: ClassVar[Tuple[str, ...]] = ("product_id", "color", "status")

    product_id: Optional[int] = None
    size: Optional[str] = None
    color: Optional[str] = None
    sku: Optional[str] = None
    min_stock: Optional[int] = None
    max_stock: Optional[int] = None
    status: Optional[bool] = None

    def to_spec(self) -> FilterSpec:
        return FilterSpec(
            predicates=(
                FieldEquals("product.product_id", self.product_id),
                FieldEquals("size", self.size),
                FieldEquals("color", self.color),
                TextSearch(self.sku, ("sku",)),
                NumericRange("stock_quantity", self.min_stock, self.max_stock),
                FieldEquals("status", self.status),
            )
        )
