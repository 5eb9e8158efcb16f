from __future__ import annotations

from abc import abstractmethod
from typing import Tuple

from admin_cache.modules.core.repositories.interfaces import IToggleableRepository
from admin_cache.modules.variants.dtos import ProductVariant


class IVariantRepository(IToggleableRepository[ProductVariant]):
    """Product-variant collection contract with the stock endpoints."""

    @abstractmethod
    async def update_stock(self, id: int, quantity: int) -> ProductVariant:
        """Set the stock quantity; returns the updated variant."""

    @abstractmethod
    async def list_low_stock(self) -> Tuple[ProductVariant, ...]:
        """Variants at or below the server's low-stock threshold."""

    @abstractmethod
    async def list_out_of_stock(self) -> Tuple[ProductVariant, ...]:
        """Variants with no stock left."""

    @abstractmethod
    async def list_by_product(self, product_id: int) -> Tuple[ProductVariant, ...]:
        """Every variant of one product."""

    @abstractmethod
    async def get_by_sku(self, sku: str) -> ProductVariant:
        """Fetch a variant by its SKU."""
