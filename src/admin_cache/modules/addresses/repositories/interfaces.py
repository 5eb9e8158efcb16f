from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from admin_cache.modules.addresses.dtos import AddressDTO, UserAddress
from admin_cache.modules.core.pagination import Page, PageRequest


class IAddressRepository(ABC):
    """Address contract; listing and creation are scoped to one user."""

    @abstractmethod
    async def list_for_user(
        self, user_id: int, page_request: Optional[PageRequest] = None
    ) -> Page[UserAddress]:
        """Every address of a user, as a single page."""

    @abstractmethod
    async def get_by_id(self, id: int) -> UserAddress:
        """Fetch one address."""

    @abstractmethod
    async def create_for_user(self, user_id: int, payload: AddressDTO) -> UserAddress:
        """Add an address to a user."""

    @abstractmethod
    async def update(self, id: int, payload: AddressDTO) -> UserAddress:
        """Replace an address."""

    @abstractmethod
    async def delete(self, id: int) -> None:
        """Delete an address."""

    @abstractmethod
    async def set_default(self, id: int) -> UserAddress:
        """Make an address its user's default; returns it with ``is_default`` set."""
