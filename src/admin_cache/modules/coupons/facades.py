"""Coupon facade.

Besides the paginated list the snapshot holds three read-only side
caches (statistics, valid coupons, public coupons); they are replaced
only by their own fetches and never patched by the CRUD protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from admin_cache.modules.core.cache import CacheState, EntityCache
from admin_cache.modules.core.dispatcher import AbortSignal
from admin_cache.modules.core.facades import EntityFacade
from admin_cache.modules.core.formatting import utcnow
from admin_cache.modules.core.pagination import Page
from admin_cache.modules.core.selectors import FilterSpec, create_selector
from admin_cache.modules.coupons import constants
from admin_cache.modules.coupons.constants import CouponType
from admin_cache.modules.coupons.dtos import (
    Coupon,
    CouponDisplay,
    CouponStatistics,
    CouponStatisticsDisplay,
)
from admin_cache.modules.coupons.filters import CouponFilters
from admin_cache.modules.coupons.repositories.interfaces import ICouponRepository
from admin_cache.modules.coupons.selectors import (
    active_coupons,
    coupons_of_type,
    expired_coupons,
    filter_coupons,
    format_coupons,
    format_current,
    format_statistics,
)


@dataclass(frozen=True)
class CouponCacheState(CacheState[Coupon]):
    statistics: Optional[CouponStatistics] = None
    available: Tuple[Coupon, ...] = ()
    public: Tuple[Coupon, ...] = ()


class CouponCache(EntityCache[Coupon]):
    def _initial_state(self) -> CouponCacheState:
        return CouponCacheState(page=Page())


def _minute(now: Optional[datetime] = None) -> datetime:
    return (now or utcnow()).replace(second=0, microsecond=0)


class CouponFacade(EntityFacade[Coupon]):
    domain = constants.DOMAIN
    current_on_write = True

    def __init__(self, repository: ICouponRepository, **kwargs) -> None:
        super().__init__(repository, **kwargs)
        self._repo: ICouponRepository = repository
        self._formatted = create_selector(format_coupons)
        self._formatted_current = create_selector(format_current)
        self._formatted_available = create_selector(format_coupons)
        self._formatted_public = create_selector(format_coupons)
        self._coupon_filter = create_selector(filter_coupons)
        self._active = create_selector(active_coupons)
        self._expired = create_selector(expired_coupons)
        self._of_type = create_selector(coupons_of_type)
        self._statistics = create_selector(format_statistics)

    def _build_cache(self) -> CouponCache:
        return CouponCache(self.domain)

    # ------------------------------------------------------------------
    # Read-only side caches
    # ------------------------------------------------------------------

    @property
    def statistics(self) -> Optional[CouponStatistics]:
        return self._cache.state.statistics

    @property
    def available(self) -> Tuple[Coupon, ...]:
        return self._cache.state.available

    @property
    def public(self) -> Tuple[Coupon, ...]:
        return self._cache.state.public

    # ------------------------------------------------------------------
    # Commands and queries
    # ------------------------------------------------------------------

    async def toggle_status(self, id: int, *, signal: Optional[AbortSignal] = None) -> Optional[Coupon]:
        """Flip the coupon status; the server's updated coupon replaces the cached one."""
        coupon = await self._dispatcher.run(
            "status_toggled",
            self._repo.toggle_status(id),
            self._cache.replace_by_id,
            signal=signal,
            entity_id=id,
        )
        if coupon is not None:
            self._log.info("coupon.status_toggled", entity_id=id, status=coupon.status)
        return coupon

    async def fetch_by_code(self, code: str, *, signal: Optional[AbortSignal] = None) -> Optional[Coupon]:
        return await self._dispatcher.run(
            "current_loaded", self._repo.get_by_code(code), self._cache.set_current, signal=signal
        )

    async def fetch_statistics(
        self, *, signal: Optional[AbortSignal] = None
    ) -> Optional[CouponStatistics]:
        return await self._dispatcher.run(
            "statistics_loaded",
            self._repo.statistics(),
            lambda statistics: self._cache.update_state(statistics=statistics),
            signal=signal,
        )

    async def fetch_available(self, *, signal: Optional[AbortSignal] = None) -> Optional[Tuple[Coupon, ...]]:
        return await self._dispatcher.run(
            "available_loaded",
            self._repo.list_valid(),
            lambda coupons: self._cache.update_state(available=coupons),
            signal=signal,
        )

    async def fetch_public(self, *, signal: Optional[AbortSignal] = None) -> Optional[Tuple[Coupon, ...]]:
        return await self._dispatcher.run(
            "public_loaded",
            self._repo.list_public(),
            lambda coupons: self._cache.update_state(public=coupons),
            signal=signal,
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def filtered(
        self, filters: Optional[CouponFilters | FilterSpec], now: Optional[datetime] = None
    ) -> Tuple[Coupon, ...]:
        return self._coupon_filter(self.content, filters, _minute(now))

    def formatted(self, now: Optional[datetime] = None) -> Tuple[CouponDisplay, ...]:
        return self._formatted(self.content, _minute(now))

    def formatted_current(self, now: Optional[datetime] = None) -> Optional[CouponDisplay]:
        return self._formatted_current(self.current, _minute(now))

    def formatted_available(self, now: Optional[datetime] = None) -> Tuple[CouponDisplay, ...]:
        return self._formatted_available(self.available, _minute(now))

    def formatted_public(self, now: Optional[datetime] = None) -> Tuple[CouponDisplay, ...]:
        return self._formatted_public(self.public, _minute(now))

    def formatted_statistics(self) -> Optional[CouponStatisticsDisplay]:
        return self._statistics(self.statistics)

    def active(self, now: Optional[datetime] = None) -> Tuple[Coupon, ...]:
        return self._active(self.content, _minute(now))

    def expired(self, now: Optional[datetime] = None) -> Tuple[Coupon, ...]:
        return self._expired(self.content, _minute(now))

    def of_type(self, coupon_type: CouponType) -> Tuple[Coupon, ...]:
        return self._of_type(self.content, coupon_type)
