"""Composition root.

``AdminStore`` wires one HTTP client, one event bus and one facade per
domain.  Each facade owns its own cache; nothing is shared between
domains except the transport and the bus.
"""

from __future__ import annotations

from typing import Optional

import httpx
import structlog

from admin_cache.modules.addresses.facades import AddressFacade
from admin_cache.modules.addresses.repositories import HttpAddressRepository
from admin_cache.modules.brands.facades import BrandFacade
from admin_cache.modules.brands.repositories import HttpBrandRepository
from admin_cache.modules.core.repositories.http_repository import create_http_client
from admin_cache.modules.coupons.facades import CouponFacade
from admin_cache.modules.coupons.repositories import HttpCouponRepository
from admin_cache.modules.order_items.facades import OrderItemFacade
from admin_cache.modules.order_items.repositories import HttpOrderItemRepository
from admin_cache.modules.variants.facades import VariantFacade
from admin_cache.modules.variants.repositories import HttpVariantRepository
from admin_cache.shared.domain.bus import IEventBus
from admin_cache.shared.infrastructure.bus import InMemoryEventBus

logger = structlog.get_logger(__name__)


class AdminStore:
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        bus: Optional[IEventBus] = None,
        page_size: Optional[int] = None,
    ) -> None:
        self._owns_client = client is None
        self.client = client if client is not None else create_http_client()
        self.bus = bus if bus is not None else InMemoryEventBus()

        options = {"bus": self.bus, "page_size": page_size}
        self.brands = BrandFacade(HttpBrandRepository(self.client), **options)
        self.coupons = CouponFacade(HttpCouponRepository(self.client), **options)
        self.variants = VariantFacade(HttpVariantRepository(self.client), **options)
        self.order_items = OrderItemFacade(HttpOrderItemRepository(self.client), **options)
        self.addresses = AddressFacade(HttpAddressRepository(self.client), **options)
        logger.debug("store.created", base_url=str(self.client.base_url))

    async def aclose(self) -> None:
        """Close the HTTP client if the store created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "AdminStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
