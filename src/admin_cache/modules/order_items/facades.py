"""Order-item facade.

The facade works on the items of one order at a time; ``fetch_items``
binds the order.  The bestseller and product-sales aggregates are
separate read-only caches: adding, editing or removing items never
patches them, only their own fetches replace them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel

from admin_cache.modules.core.cache import CacheState, EntityCache
from admin_cache.modules.core.dispatcher import AbortSignal
from admin_cache.modules.core.facades import EntityFacade
from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.selectors import create_selector
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
from admin_cache.modules.order_items.exceptions import OrderNotSelected
from admin_cache.modules.order_items.repositories.interfaces import IOrderItemRepository
from admin_cache.modules.order_items.selectors import (
    format_bestselling_products,
    format_bestselling_variants,
    format_items,
    format_product_sales,
    summarize,
    top_selling_product,
    top_selling_variant,
)


@dataclass(frozen=True)
class OrderItemCacheState(CacheState[OrderItem]):
    bestselling_variants: Tuple[BestsellingVariant, ...] = ()
    bestselling_products: Tuple[BestsellingProduct, ...] = ()
    product_sales: Optional[ProductSales] = None


class OrderItemCache(EntityCache[OrderItem]):
    def _initial_state(self) -> OrderItemCacheState:
        return OrderItemCacheState(page=Page())


class OrderItemFacade(EntityFacade[OrderItem]):
    domain = constants.DOMAIN
    unpaginated = True

    def __init__(self, repository: IOrderItemRepository, **kwargs) -> None:
        super().__init__(repository, **kwargs)
        self._repo: IOrderItemRepository = repository
        self._order_id: Optional[int] = None
        self._formatted = create_selector(format_items)
        self._summary = create_selector(summarize)
        self._variant_displays = create_selector(format_bestselling_variants)
        self._product_displays = create_selector(format_bestselling_products)
        self._top_variant = create_selector(top_selling_variant)
        self._top_product = create_selector(top_selling_product)
        self._sales_display = create_selector(format_product_sales)

    def _build_cache(self) -> OrderItemCache:
        return OrderItemCache(self.domain)

    @property
    def order_id(self) -> Optional[int]:
        return self._order_id

    # ------------------------------------------------------------------
    # Items of the bound order
    # ------------------------------------------------------------------

    async def fetch_items(
        self, order_id: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[Page[OrderItem]]:
        """Bind ``order_id`` and load its items."""
        self._order_id = order_id
        return await self.fetch_page(signal=signal)

    def _bound_order(self) -> int:
        if self._order_id is None:
            raise OrderNotSelected("Fetch the items of an order before editing them.")
        return self._order_id

    def _remote_list(self, page_request: PageRequest, filters: Optional[FilterModel]):
        return self._repo.list_items(self._bound_order(), page_request)

    def _remote_get(self, id: int):
        return self._repo.get_item(self._bound_order(), id)

    def _remote_create(self, payload: BaseModel):
        return self._repo.add_item(self._bound_order(), payload)

    def _remote_update(self, id: int, payload: BaseModel):
        return self._repo.update_item(self._bound_order(), id, payload)

    def _remote_delete(self, id: int):
        return self._repo.remove_item(self._bound_order(), id)

    def _apply_page(self, page: Page[OrderItem]) -> None:
        current = self._cache.current
        # the detail item may belong to the previously bound order
        stale = current is not None and current.order_id != self._order_id
        self._cache.replace_page(page, clear_current=stale)

    # ------------------------------------------------------------------
    # Read-only aggregates
    # ------------------------------------------------------------------

    @property
    def bestselling_variants(self) -> Tuple[BestsellingVariant, ...]:
        return self._cache.state.bestselling_variants

    @property
    def bestselling_products(self) -> Tuple[BestsellingProduct, ...]:
        return self._cache.state.bestselling_products

    @property
    def product_sales(self) -> Optional[ProductSales]:
        return self._cache.state.product_sales

    async def fetch_bestselling_variants(
        self, limit: int = constants.DEFAULT_BESTSELLER_LIMIT, *, signal: Optional[AbortSignal] = None
    ) -> Optional[Tuple[BestsellingVariant, ...]]:
        return await self._dispatcher.run(
            "bestselling_variants_loaded",
            self._repo.bestselling_variants(limit),
            lambda variants: self._cache.update_state(bestselling_variants=variants),
            signal=signal,
        )

    async def fetch_bestselling_products(
        self, limit: int = constants.DEFAULT_BESTSELLER_LIMIT, *, signal: Optional[AbortSignal] = None
    ) -> Optional[Tuple[BestsellingProduct, ...]]:
        return await self._dispatcher.run(
            "bestselling_products_loaded",
            self._repo.bestselling_products(limit),
            lambda products: self._cache.update_state(bestselling_products=products),
            signal=signal,
        )

    async def fetch_product_sales(
        self, product_id: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[ProductSales]:
        return await self._dispatcher.run(
            "product_sales_loaded",
            self._repo.product_sales(product_id),
            lambda sales: self._cache.update_state(product_sales=sales),
            signal=signal,
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def formatted(self) -> Tuple[OrderItemDisplay, ...]:
        return self._formatted(self.content)

    def summary(self) -> OrderItemSummary:
        return self._summary(self.content)

    def formatted_bestselling_variants(self) -> Tuple[BestsellingVariantDisplay, ...]:
        return self._variant_displays(self.bestselling_variants)

    def formatted_bestselling_products(self) -> Tuple[BestsellingProductDisplay, ...]:
        return self._product_displays(self.bestselling_products)

    def top_selling_variant(self) -> Optional[BestsellingVariant]:
        return self._top_variant(self.bestselling_variants)

    def top_selling_product(self) -> Optional[BestsellingProduct]:
        return self._top_product(self.bestselling_products)

    def formatted_product_sales(self) -> Optional[ProductSalesDisplay]:
        return self._sales_display(self.product_sales)
