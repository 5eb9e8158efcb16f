"""Order-item DTOs and the read-only sales aggregates."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from pydantic import field_validator

from admin_cache.modules.core.dtos import CacheEntity, WireModel


class OrderItem(CacheEntity):
    ID_FIELD: ClassVar[str] = "order_item_id"

    order_item_id: int
    order_id: int
    product_variant_id: int
    product_name: Optional[str] = None
    variant_name: Optional[str] = None
    quantity: int
    price: Decimal
    subtotal: Optional[Decimal] = None
    product_image: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        if self.subtotal is not None:
            return self.subtotal
        return self.price * self.quantity


class AddOrderItemDTO(WireModel):
    """Validates a positive quantity and price."""

    product_variant_id: int
    quantity: int
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class UpdateOrderItemDTO(WireModel):
    quantity: Optional[int] = None
    price: Optional[Decimal] = None
    note: Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


class BestsellingVariant(WireModel):
    variant_id: int
    product_id: int
    product_name: str
    size: Optional[str] = None
    color: Optional[str] = None
    quantity_sold: int = 0


class BestsellingProduct(WireModel):
    product_id: int
    product_name: str
    product_image: Optional[str] = None
    total_quantity_sold: int = 0


class VariantSales(WireModel):
    variant_id: int
    size: Optional[str] = None
    color: Optional[str] = None
    quantity_sold: int = 0


class ProductSales(WireModel):
    product_id: int
    total_quantity_sold: int = 0
    total_revenue: Decimal = Decimal(0)
    variant_sales: Tuple[VariantSales, ...] = ()


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


class OrderItemDisplay(WireModel):
    item: OrderItem
    formatted_price: str
    formatted_subtotal: str
    display_name: str


class OrderItemSummary(WireModel):
    item_count: int = 0
    total_quantity: int = 0
    total_value: Decimal = Decimal(0)
    average_price: Decimal = Decimal(0)
    formatted_total_value: str = ""
    formatted_average_price: str = ""


class BestsellingVariantDisplay(WireModel):
    variant: BestsellingVariant
    display_name: str
    percentage_of_total: str


class BestsellingProductDisplay(WireModel):
    product: BestsellingProduct
    percentage_of_total: str


class ProductSalesDisplay(WireModel):
    sales: ProductSales
    formatted_total_revenue: str
    average_unit_price: Decimal
    formatted_average_unit_price: str
