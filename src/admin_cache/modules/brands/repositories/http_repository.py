from __future__ import annotations

from typing import Tuple

from admin_cache.modules.brands import constants
from admin_cache.modules.brands.dtos import Brand
from admin_cache.modules.brands.repositories.interfaces import IBrandRepository
from admin_cache.modules.core.repositories.http_repository import HttpEntityRepository


class HttpBrandRepository(HttpEntityRepository[Brand], IBrandRepository):
    entity_model = Brand

    list_path = constants.LIST_PATH
    view_path = constants.VIEW_PATH
    create_path = constants.CREATE_PATH
    update_path = constants.UPDATE_PATH
    delete_path = constants.DELETE_PATH
    toggle_path = constants.STATUS_PATH
    default_sort = constants.DEFAULT_SORT

    async def list_active(self) -> Tuple[Brand, ...]:
        return self._entities(await self._request("GET", constants.ACTIVE_PATH))
