"""User-address facade, bound to one user at a time."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel

from admin_cache.modules.addresses import constants
from admin_cache.modules.addresses.cache import AddressCache
from admin_cache.modules.addresses.dtos import AddressDisplay, UserAddress
from admin_cache.modules.addresses.exceptions import UserNotSelected
from admin_cache.modules.addresses.repositories.interfaces import IAddressRepository
from admin_cache.modules.addresses.selectors import format_addresses, unique_cities
from admin_cache.modules.core.dispatcher import AbortSignal
from admin_cache.modules.core.facades import EntityFacade
from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.selectors import create_selector


class AddressFacade(EntityFacade[UserAddress]):
    domain = constants.DOMAIN
    unpaginated = True

    def __init__(self, repository: IAddressRepository, **kwargs) -> None:
        super().__init__(repository, **kwargs)
        self._repo: IAddressRepository = repository
        self._user_id: Optional[int] = None
        self._formatted = create_selector(format_addresses)
        self._unique_cities = create_selector(unique_cities)

    def _build_cache(self) -> AddressCache:
        return AddressCache(self.domain)

    @property
    def user_id(self) -> Optional[int]:
        return self._user_id

    @property
    def default(self) -> Optional[UserAddress]:
        return self._cache.state.default

    @property
    def count(self) -> int:
        return self._cache.state.count

    async def fetch_addresses(
        self, user_id: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[Page[UserAddress]]:
        """Bind ``user_id`` and load every address of that user."""
        self._user_id = user_id
        return await self.fetch_page(signal=signal)

    async def set_default(
        self, id: int, *, signal: Optional[AbortSignal] = None
    ) -> Optional[UserAddress]:
        address = await self._dispatcher.run(
            "default_set",
            self._repo.set_default(id),
            self._apply_default,
            signal=signal,
            entity_id=id,
        )
        if address is not None:
            self._log.info("address.default_set", entity_id=id)
        return address

    def _bound_user(self) -> int:
        if self._user_id is None:
            raise UserNotSelected("Fetch the addresses of a user before adding one.")
        return self._user_id

    def _remote_list(self, page_request: PageRequest, filters: Optional[FilterModel]):
        return self._repo.list_for_user(self._bound_user(), page_request)

    def _remote_create(self, payload: BaseModel):
        return self._repo.create_for_user(self._bound_user(), payload)

    def _apply_page(self, page: Page[UserAddress]) -> None:
        current = self._cache.current
        stale = current is not None and current.user_id not in (None, self._user_id)
        self._cache.replace_page(page, clear_current=stale)

    def _apply_default(self, address: UserAddress) -> None:
        if not address.is_default:
            address = address.model_copy(update={"is_default": True})
        self._cache.replace_by_id(address)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def formatted(self) -> Tuple[AddressDisplay, ...]:
        return self._formatted(self.content)

    def by_city(self) -> Dict[Optional[str], Tuple[UserAddress, ...]]:
        return self.grouped("city")

    def by_district(self) -> Dict[Optional[str], Tuple[UserAddress, ...]]:
        return self.grouped("district")

    def unique_cities(self) -> Tuple[str, ...]:
        return self._unique_cities(self.content)
