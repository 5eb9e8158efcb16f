"""Variant cache with its stock side caches.

``low_stock`` and ``out_of_stock`` are fetched independently of the
page and are not derived from it.  A confirmed stock update moves the
variant between them in the same swap that patches the page, the
current variant and the per-product list.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from admin_cache.config import settings
from admin_cache.modules.core.cache import CacheState, EntityCache, replace_by_id
from admin_cache.modules.core.pagination import Page
from admin_cache.modules.variants.dtos import ProductVariant

Variants = Tuple[ProductVariant, ...]


@dataclass(frozen=True)
class VariantCacheState(CacheState[ProductVariant]):
    low_stock: Variants = ()
    out_of_stock: Variants = ()
    by_product: Variants = ()


def _replaced(variants: Variants, variant: ProductVariant) -> Variants:
    return tuple(variant if item.variant_id == variant.variant_id else item for item in variants)


def _without(variants: Variants, variant_id: int) -> Variants:
    return tuple(item for item in variants if item.variant_id != variant_id)


def reclassify(
    state: VariantCacheState, variant: ProductVariant, threshold: int
) -> VariantCacheState:
    """Place ``variant`` in the side cache its stock level belongs to.

    0 goes to out-of-stock only, 1..threshold to low-stock only, anything
    above to neither, whatever its previous membership.
    """
    low_stock = _without(state.low_stock, variant.variant_id)
    out_of_stock = _without(state.out_of_stock, variant.variant_id)
    if variant.stock_quantity <= 0:
        out_of_stock = out_of_stock + (variant,)
    elif variant.stock_quantity <= threshold:
        low_stock = low_stock + (variant,)
    return replace(state, low_stock=low_stock, out_of_stock=out_of_stock)


class VariantCache(EntityCache[ProductVariant]):
    def __init__(self, domain: str, threshold: Optional[int] = None) -> None:
        super().__init__(domain)
        self.threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold

    def _initial_state(self) -> VariantCacheState:
        return VariantCacheState(page=Page())

    def update_stock(self, variant: ProductVariant) -> int:
        state = replace(
            self._state,
            page=replace_by_id(self._state.page, variant),
            current=self._refresh_current(variant),
        )
        state = reclassify(self._after_upsert(state, variant), variant, self.threshold)
        self._log.debug(
            "cache.stock_updated",
            entity_id=variant.variant_id,
            stock_quantity=variant.stock_quantity,
        )
        return self._commit(state)

    def _after_upsert(self, state: VariantCacheState, entity: ProductVariant) -> VariantCacheState:
        return replace(
            state,
            by_product=_replaced(state.by_product, entity),
            low_stock=_replaced(state.low_stock, entity),
            out_of_stock=_replaced(state.out_of_stock, entity),
        )

    def _after_remove(self, state: VariantCacheState, entity_id: int) -> VariantCacheState:
        return replace(
            state,
            by_product=_without(state.by_product, entity_id),
            low_stock=_without(state.low_stock, entity_id),
            out_of_stock=_without(state.out_of_stock, entity_id),
        )
