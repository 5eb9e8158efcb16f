"""Derived views over order items and the sales aggregates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence, Tuple

from admin_cache.modules.core.formatting import format_currency, format_ratio
from admin_cache.modules.order_items import constants
from admin_cache.modules.order_items.dtos import (
    BestsellingProduct,
    BestsellingProductDisplay,
    BestsellingVariant,
    BestsellingVariantDisplay,
    OrderItem,
    OrderItemDisplay,
    OrderItemSummary,
    ProductSales,
    ProductSalesDisplay,
)

CENTS = Decimal("0.01")


def format_price(amount: Optional[Decimal]) -> str:
    """``12.5`` -> ``'$12.50'``; a missing amount shows as ``'$0.00'``."""
    return format_currency(
        amount if amount is not None else 0,
        constants.PRICE_SYMBOL,
        constants.PRICE_PLACES,
        prefix=True,
    )


def _percentage(part: int, total: int) -> str:
    return f"{format_ratio(part, total)}%"


def format_item(item: OrderItem) -> OrderItemDisplay:
    return OrderItemDisplay(
        item=item,
        formatted_price=format_price(item.price),
        formatted_subtotal=format_price(item.subtotal),
        display_name=f"{item.product_name or ''} - {item.variant_name or ''}",
    )


def format_items(content: Sequence[OrderItem]) -> Tuple[OrderItemDisplay, ...]:
    return tuple(format_item(item) for item in content)


def summarize(content: Sequence[OrderItem]) -> OrderItemSummary:
    """Totals over the order; the average is value per unit sold."""
    total_value = sum((item.line_total for item in content), Decimal(0))
    total_quantity = sum(item.quantity for item in content)
    average = Decimal(0)
    if total_quantity:
        average = (total_value / total_quantity).quantize(CENTS, rounding=ROUND_HALF_UP)
    return OrderItemSummary(
        item_count=len(content),
        total_quantity=total_quantity,
        total_value=total_value,
        average_price=average,
        formatted_total_value=format_price(total_value),
        formatted_average_price=format_price(average),
    )


def format_bestselling_variants(
    variants: Sequence[BestsellingVariant],
) -> Tuple[BestsellingVariantDisplay, ...]:
    total = sum(variant.quantity_sold for variant in variants)
    return tuple(
        BestsellingVariantDisplay(
            variant=variant,
            display_name=f"{variant.product_name} - {variant.size}, {variant.color}",
            percentage_of_total=_percentage(variant.quantity_sold, total),
        )
        for variant in variants
    )


def format_bestselling_products(
    products: Sequence[BestsellingProduct],
) -> Tuple[BestsellingProductDisplay, ...]:
    total = sum(product.total_quantity_sold for product in products)
    return tuple(
        BestsellingProductDisplay(
            product=product,
            percentage_of_total=_percentage(product.total_quantity_sold, total),
        )
        for product in products
    )


def top_selling_variant(variants: Sequence[BestsellingVariant]) -> Optional[BestsellingVariant]:
    if not variants:
        return None
    return max(variants, key=lambda variant: variant.quantity_sold)


def top_selling_product(products: Sequence[BestsellingProduct]) -> Optional[BestsellingProduct]:
    if not products:
        return None
    return max(products, key=lambda product: product.total_quantity_sold)


def format_product_sales(sales: Optional[ProductSales]) -> Optional[ProductSalesDisplay]:
    if sales is None:
        return None
    average = Decimal(0)
    if sales.total_quantity_sold:
        average = (sales.total_revenue / sales.total_quantity_sold).quantize(
            CENTS, rounding=ROUND_HALF_UP
        )
    return ProductSalesDisplay(
        sales=sales,
        formatted_total_revenue=format_price(sales.total_revenue),
        average_unit_price=average,
        formatted_average_unit_price=format_price(average),
    )
