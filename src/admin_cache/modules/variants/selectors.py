"""Derived views over cached product variants."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Tuple

from admin_cache.config import settings
from admin_cache.modules.core.selectors import distinct_values, get_field
from admin_cache.modules.variants.dtos import (
    ProductVariant,
    StockRange,
    VariantDisplay,
    VariantHierarchy,
)

OUT_OF_STOCK = "Out of stock"
LOW_STOCK = "Low stock"
IN_STOCK = "In stock"


def stock_status(quantity: int, threshold: Optional[int] = None) -> str:
    """Classify a stock level: 0 is out, up to ``threshold`` is low."""
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= threshold:
        return LOW_STOCK
    return IN_STOCK


def unique_sizes(content: Sequence[ProductVariant]) -> Tuple[str, ...]:
    return distinct_values(content, "size")


def unique_colors(content: Sequence[ProductVariant]) -> Tuple[str, ...]:
    return distinct_values(content, "color")


def stock_range(content: Sequence[ProductVariant]) -> StockRange:
    quantities = [variant.stock_quantity for variant in content]
    if not quantities:
        return StockRange()
    return StockRange(minimum=min(quantities), maximum=max(quantities))


def stock_totals(content: Sequence[ProductVariant], key: str) -> Dict[str, int]:
    """Summed stock per distinct value of ``key`` (``size`` or ``color``)."""
    totals: Dict[str, int] = {}
    for variant in content:
        value = get_field(variant, key)
        if value is None:
            continue
        totals[value] = totals.get(value, 0) + variant.stock_quantity
    return totals


def variant_hierarchy(content: Sequence[ProductVariant]) -> VariantHierarchy:
    active = sum(1 for variant in content if variant.status)
    return VariantHierarchy(
        total_variants=len(content),
        active_variants=active,
        inactive_variants=len(content) - active,
        total_stock=sum(variant.stock_quantity for variant in content),
        stock_by_size=stock_totals(content, "size"),
        stock_by_color=stock_totals(content, "color"),
    )


def display_variants(
    content: Sequence[ProductVariant],
    generation: int,
    image_url: Callable[[ProductVariant], Optional[str]],
    threshold: Optional[int] = None,
) -> Tuple[VariantDisplay, ...]:
    return tuple(
        VariantDisplay(
            variant=variant,
            image_url=image_url(variant),
            stock_status=stock_status(variant.stock_quantity, threshold),
        )
        for variant in content
    )
