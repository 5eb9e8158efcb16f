"""Order-item remote contract.

Items live under their order, so every item call carries the order id.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.order_items.dtos import (
    AddOrderItemDTO,
    BestsellingProduct,
    BestsellingVariant,
    OrderItem,
    ProductSales,
    UpdateOrderItemDTO,
)


class IOrderItemRepository(ABC):
    @abstractmethod
    async def list_items(
        self, order_id: int, page_request: Optional[PageRequest] = None
    ) -> Page[OrderItem]:
        """All items of an order, as a single page."""

    @abstractmethod
    async def get_item(self, order_id: int, item_id: int) -> OrderItem:
        """Fetch one item of an order."""

    @abstractmethod
    async def add_item(self, order_id: int, payload: AddOrderItemDTO) -> OrderItem:
        """Add an item to an order."""

    @abstractmethod
    async def update_item(
        self, order_id: int, item_id: int, payload: UpdateOrderItemDTO
    ) -> OrderItem:
        """Change quantity, price or note of an item."""

    @abstractmethod
    async def remove_item(self, order_id: int, item_id: int) -> None:
        """Remove an item from an order."""

    @abstractmethod
    async def bestselling_variants(self, limit: int) -> Tuple[BestsellingVariant, ...]:
        """Top variants by quantity sold across all orders."""

    @abstractmethod
    async def bestselling_products(self, limit: int) -> Tuple[BestsellingProduct, ...]:
        """Top products by quantity sold across all orders."""

    @abstractmethod
    async def product_sales(self, product_id: int) -> ProductSales:
        """Sales breakdown of one product."""
