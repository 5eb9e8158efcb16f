from __future__ import annotations

from typing import Tuple

from admin_cache.modules.core.repositories.http_repository import HttpEntityRepository
from admin_cache.modules.variants import constants
from admin_cache.modules.variants.dtos import ProductVariant
from admin_cache.modules.variants.repositories.interfaces import IVariantRepository


class HttpVariantRepository(HttpEntityRepository[ProductVariant], IVariantRepository):
    entity_model = ProductVariant

    list_path = constants.LIST_PATH
    view_path = constants.VIEW_PATH
    create_path = constants.CREATE_PATH
    update_path = constants.UPDATE_PATH
    delete_path = constants.DELETE_PATH
    toggle_path = constants.STATUS_PATH
    default_sort = constants.DEFAULT_SORT

    async def update_stock(self, id: int, quantity: int) -> ProductVariant:
        data = await self._request(
            "PATCH", constants.STOCK_PATH.format(id=id), params={"quantity": str(quantity)}
        )
        return self._entity(data)

    async def list_low_stock(self) -> Tuple[ProductVariant, ...]:
        return self._entities(await self._request("GET", constants.LOW_STOCK_PATH))

    async def list_out_of_stock(self) -> Tuple[ProductVariant, ...]:
        return self._entities(await self._request("GET", constants.OUT_OF_STOCK_PATH))

    async def list_by_product(self, product_id: int) -> Tuple[ProductVariant, ...]:
        path = constants.BY_PRODUCT_PATH.format(product_id=product_id)
        return self._entities(await self._request("GET", path))

    async def get_by_sku(self, sku: str) -> ProductVariant:
        path = constants.BY_SKU_PATH.format(sku=sku.strip())
        return self._entity(await self._request("GET", path))
