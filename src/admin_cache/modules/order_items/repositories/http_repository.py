from __future__ import annotations

from typing import Optional, Tuple

from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.repositories.http_repository import HttpRepository, request_body
from admin_cache.modules.order_items import constants
from admin_cache.modules.order_items.dtos import (
    AddOrderItemDTO,
    BestsellingProduct,
    BestsellingVariant,
    OrderItem,
    ProductSales,
    UpdateOrderItemDTO,
)
from admin_cache.modules.order_items.repositories.interfaces import IOrderItemRepository


class HttpOrderItemRepository(HttpRepository[OrderItem], IOrderItemRepository):
    entity_model = OrderItem

    async def list_items(
        self, order_id: int, page_request: Optional[PageRequest] = None
    ) -> Page[OrderItem]:
        data = await self._request("GET", constants.ITEMS_PATH.format(order_id=order_id))
        return self._list_as_page(data, page_request)

    async def get_item(self, order_id: int, item_id: int) -> OrderItem:
        path = constants.ITEM_PATH.format(order_id=order_id, item_id=item_id)
        return self._entity(await self._request("GET", path))

    async def add_item(self, order_id: int, payload: AddOrderItemDTO) -> OrderItem:
        path = constants.ADD_ITEM_PATH.format(order_id=order_id)
        return self._entity(await self._request("POST", path, json=request_body(payload)))

    async def update_item(
        self, order_id: int, item_id: int, payload: UpdateOrderItemDTO
    ) -> OrderItem:
        path = constants.ITEM_PATH.format(order_id=order_id, item_id=item_id)
        return self._entity(await self._request("PUT", path, json=request_body(payload)))

    async def remove_item(self, order_id: int, item_id: int) -> None:
        await self._request("DELETE", constants.ITEM_PATH.format(order_id=order_id, item_id=item_id))

    async def bestselling_variants(self, limit: int) -> Tuple[BestsellingVariant, ...]:
        data = await self._request(
            "GET", constants.BESTSELLING_VARIANTS_PATH, params={"limit": str(limit)}
        )
        return tuple(self._decode(BestsellingVariant, item) for item in data or ())

    async def bestselling_products(self, limit: int) -> Tuple[BestsellingProduct, ...]:
        data = await self._request(
            "GET", constants.BESTSELLING_PRODUCTS_PATH, params={"limit": str(limit)}
        )
        return tuple(self._decode(BestsellingProduct, item) for item in data or ())

    async def product_sales(self, product_id: int) -> ProductSales:
        path = constants.PRODUCT_SALES_PATH.format(product_id=product_id)
        data = await self._request("GET", path)
        return self._decode(ProductSales, data or {"productId": product_id})
