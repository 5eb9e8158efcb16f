from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel

from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.repositories.http_repository import HttpEntityRepository
from admin_cache.modules.coupons import constants
from admin_cache.modules.coupons.dtos import Coupon, CouponStatistics
from admin_cache.modules.coupons.repositories.interfaces import ICouponRepository


class HttpCouponRepository(HttpEntityRepository[Coupon], ICouponRepository):
    entity_model = Coupon

    list_path = constants.LIST_PATH
    view_path = constants.VIEW_PATH
    create_path = constants.CREATE_PATH
    update_path = constants.UPDATE_PATH
    delete_path = constants.DELETE_PATH
    toggle_path = constants.TOGGLE_PATH
    default_sort = constants.DEFAULT_SORT

    async def list(
        self, page_request: PageRequest, filters: Optional[BaseModel] = None
    ) -> Page[Coupon]:
        """Unfiltered lists use the plain endpoint; any server filter goes to search."""
        params = self._query(page_request, filters)
        if len(params) > len(page_request.to_params()):
            data = await self._request("GET", constants.SEARCH_PATH, params=params)
        else:
            data = await self._request(
                "GET", self.list_path, params=self._query(page_request, None, self.default_sort)
            )
        return self._page(data)

    async def toggle_status(self, id: int) -> Coupon:
        return self._entity(await self._request("PATCH", self.toggle_path.format(id=id)))

    async def get_by_code(self, code: str) -> Coupon:
        path = constants.VIEW_BY_CODE_PATH.format(code=code.strip().upper())
        return self._entity(await self._request("GET", path))

    async def list_valid(self) -> Tuple[Coupon, ...]:
        return self._entities(await self._request("GET", constants.VALID_PATH))

    async def list_public(self) -> Tuple[Coupon, ...]:
        return self._entities(await self._request("GET", constants.PUBLIC_PATH))

    async def statistics(self) -> CouponStatistics:
        return self._decode(
            CouponStatistics, await self._request("GET", constants.STATISTICS_PATH) or {}
        )
