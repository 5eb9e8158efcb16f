"""Product-variant facade."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from admin_cache.modules.core.dispatcher import AbortSignal
from admin_cache.modules.core.facades import EntityFacade
from admin_cache.modules.core.images import ImageVersions
from admin_cache.modules.core.pagination import Page
from admin_cache.modules.core.selectors import create_selector
from admin_cache.modules.variants import constants
from admin_cache.modules.variants.cache import VariantCache, Variants
from admin_cache.modules.variants.dtos import (
    ProductVariant,
    StockRange,
    StockUpdateDTO,
    VariantDisplay,
    VariantHierarchy,
)
from admin_cache.modules.variants.repositories.interfaces import IVariantRepository
from admin_cache.modules.variants.selectors import (
    display_variants,
    stock_range,
    stock_totals,
    unique_colors,
    unique_sizes,
    variant_hierarchy,
)


class VariantFacade(EntityFacade[ProductVariant]):
    domain = constants.DOMAIN
    current_on_write = True

    def __init__(
        self,
        repository: IVariantRepository,
        *,
        low_stock_threshold: Optional[int] = None,
        **kwargs,
    ) -> None:
        self._threshold = low_stock_threshold
        super().__init__(repository, **kwargs)
        self._repo: IVariantRepository = repository
        self._images = ImageVersions()
        self._unique_sizes = create_selector(unique_sizes)
        self._unique_colors = create_selector(unique_colors)
        self._stock_range = create_selector(stock_range)
        self._stock_totals = create_selector(stock_totals)
        self._hierarchy = create_selector(variant_hierarchy)
        self._displayed = create_selector(display_variants)

    def _build_cache(self) -> VariantCache:
        return VariantCache(self.domain, self._threshold)

    # ------------------------------------------------------------------
    # Side caches
    # ------------------------------------------------------------------

    @property
    def low_stock(self) -> Variants:
        return self._cache.state.low_stock

    @property
    def out_of_stock(self) -> Variants:
        return self._cache.state.out_of_stock

    @property
    def by_product(self) -> Variants:
        return self._cache.state.by_product

    # ------------------------------------------------------------------
    # Commands and queries
    # ------------------------------------------------------------------

    async def toggle_status(self, id: int, *, signal: Optional[AbortSignal] = None) -> Optional[int]:
        return await self._toggle(id, "status", signal=signal)

    async def update_stock_quantity(
        self, id: int, quantity: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[ProductVariant]:
        """Set a variant's stock and move it between the stock side caches.

        Raises:
            pydantic.ValidationError: ``quantity`` is negative; nothing is sent.
            TransportError: the server rejected the update.
        """
        request = StockUpdateDTO(quantity=quantity)
        variant = await self._dispatcher.run(
            "stock_updated",
            self._repo.update_stock(id, request.quantity),
            self._apply_stock,
            signal=signal,
            entity_id=id,
        )
        if variant is not None:
            self._log.info(
                "variant.stock_updated", entity_id=id, stock_quantity=variant.stock_quantity
            )
        return variant

    async def fetch_low_stock(self, *, signal: Optional[AbortSignal] = None) -> Optional[Variants]:
        return await self._dispatcher.run(
            "low_stock_loaded",
            self._repo.list_low_stock(),
            lambda variants: self._cache.update_state(low_stock=variants),
            signal=signal,
        )

    async def fetch_out_of_stock(self, *, signal: Optional[AbortSignal] = None) -> Optional[Variants]:
        return await self._dispatcher.run(
            "out_of_stock_loaded",
            self._repo.list_out_of_stock(),
            lambda variants: self._cache.update_state(out_of_stock=variants),
            signal=signal,
        )

    async def fetch_by_product(
        self, product_id: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[Variants]:
        return await self._dispatcher.run(
            "by_product_loaded",
            self._repo.list_by_product(product_id),
            lambda variants: self._cache.update_state(by_product=variants),
            signal=signal,
        )

    async def fetch_by_sku(self, sku: str, *, signal: Optional[AbortSignal] = None) -> Optional[ProductVariant]:
        return await self._dispatcher.run(
            "current_loaded", self._repo.get_by_sku(sku), self._cache.set_current, signal=signal
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def by_size(self) -> Dict[str, Tuple[ProductVariant, ...]]:
        return self.grouped("size")

    def by_color(self) -> Dict[str, Tuple[ProductVariant, ...]]:
        return self.grouped("color")

    def unique_sizes(self) -> Tuple[str, ...]:
        return self._unique_sizes(self.content)

    def unique_colors(self) -> Tuple[str, ...]:
        return self._unique_colors(self.content)

    def stock_range(self) -> StockRange:
        return self._stock_range(self.content)

    def stock_by_size(self) -> Dict[str, int]:
        return self._stock_totals(self.content, "size")

    def stock_by_color(self) -> Dict[str, int]:
        return self._stock_totals(self.content, "color")

    def hierarchy(self) -> VariantHierarchy:
        return self._hierarchy(self.content)

    def image_url(self, variant: ProductVariant) -> Optional[str]:
        return self._images.url_for(variant.image_url, variant.variant_id)

    def displayed(self) -> Tuple[VariantDisplay, ...]:
        return self._displayed(
            self.content, self._images.generation, self.image_url, self._cache.threshold
        )

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _apply_page(self, page: Page[ProductVariant]) -> None:
        super()._apply_page(page)
        self._images.bump_all()

    def _apply_updated(self, entity: ProductVariant) -> None:
        super()._apply_updated(entity)
        self._images.bump(entity.variant_id)

    def _apply_stock(self, variant: ProductVariant) -> None:
        self._cache.update_stock(variant)

    def _on_refresh(self) -> None:
        self._images.bump_all()
