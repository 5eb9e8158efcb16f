"""Product-variant DTOs."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Dict, Optional

from pydantic import field_validator

from admin_cache.modules.core.dtos import CacheEntity, WireModel


class VariantProduct(WireModel):
    """The parent product, as embedded in a variant payload."""

    product_id: int
    name: str
    price: Optional[Decimal] = None


class ProductVariant(CacheEntity):
    ID_FIELD: ClassVar[str] = "variant_id"

    variant_id: int
    product: Optional[VariantProduct] = None
    size: Optional[str] = None
    color: Optional[str] = None
    sku: Optional[str] = None
    stock_quantity: int = 0
    image_url: Optional[str] = None
    status: bool = True

    @property
    def product_id(self) -> Optional[int]:
        return self.product.product_id if self.product is not None else None


def _stock_not_negative(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 0:
        raise ValueError("Stock quantity cannot be negative.")
    return v


def _normalize_sku(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("SKU must not be empty.")
    return v.strip().upper()


class CreateVariantDTO(WireModel):
    """Validates a non-negative stock and, when given, a non-empty SKU."""

    product_id: int
    size: str
    color: str
    stock_quantity: int = 0
    sku: Optional[str] = None
    image_url: Optional[str] = None
    status: bool = True

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _stock_not_negative(v)

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_sku(v)


class UpdateVariantDTO(WireModel):
    size: Optional[str] = None
    color: Optional[str] = None
    stock_quantity: Optional[int] = None
    sku: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[bool] = None

    @field_validator("stock_quantity")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _stock_not_negative(v)

    @field_validator("sku")
    @classmethod
    def sku_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_sku(v)


class StockRange(WireModel):
    minimum: int = 0
    maximum: int = 0


class VariantHierarchy(WireModel):
    total_variants: int = 0
    active_variants: int = 0
    inactive_variants: int = 0
    total_stock: int = 0
    stock_by_size: Dict[str, int] = {}
    stock_by_color: Dict[str, int] = {}


class VariantDisplay(WireModel):
    variant: ProductVariant
    image_url: Optional[str] = None
    stock_status: str


class StockUpdateDTO(WireModel):
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_non_negative(cls, v: int) -> int:
        return _stock_not_negative(v)
