from __future__ import annotations

from typing import Optional

from admin_cache.modules.addresses import constants
from admin_cache.modules.addresses.dtos import AddressDTO, UserAddress
from admin_cache.modules.addresses.repositories.interfaces import IAddressRepository
from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.repositories.http_repository import HttpRepository, request_body


class HttpAddressRepository(HttpRepository[UserAddress], IAddressRepository):
    entity_model = UserAddress

    async def list_for_user(
        self, user_id: int, page_request: Optional[PageRequest] = None
    ) -> Page[UserAddress]:
        data = await self._request("GET", constants.USER_ADDRESSES_PATH.format(user_id=user_id))
        return self._list_as_page(data, page_request)

    async def get_by_id(self, id: int) -> UserAddress:
        return self._entity(await self._request("GET", constants.ADDRESS_PATH.format(id=id)))

    async def create_for_user(self, user_id: int, payload: AddressDTO) -> UserAddress:
        path = constants.USER_ADDRESSES_PATH.format(user_id=user_id)
        return self._entity(await self._request("POST", path, json=request_body(payload)))

    async def update(self, id: int, payload: AddressDTO) -> UserAddress:
        path = constants.ADDRESS_PATH.format(id=id)
        return self._entity(await self._request("PUT", path, json=request_body(payload)))

    async def delete(self, id: int) -> None:
        await self._request("DELETE", constants.ADDRESS_PATH.format(id=id))

    async def set_default(self, id: int) -> UserAddress:
        return self._entity(await self._request("PUT", constants.SET_DEFAULT_PATH.format(id=id)))
