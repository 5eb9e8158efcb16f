from __future__ import annotations

from abc import abstractmethod
from typing import Tuple

from admin_cache.modules.core.repositories.interfaces import IRepository
from admin_cache.modules.coupons.dtos import Coupon, CouponStatistics


class ICouponRepository(IRepository[Coupon]):
    """Coupon collection contract.

    The status toggle answers with the updated coupon instead of its id.
    """

    @abstractmethod
    async def toggle_status(self, id: int) -> Coupon:
        """Flip the status flag server-side."""

    @abstractmethod
    async def get_by_code(self, code: str) -> Coupon:
        """Fetch a coupon by its code."""

    @abstractmethod
    async def list_valid(self) -> Tuple[Coupon, ...]:
        """Coupons currently redeemable."""

    @abstractmethod
    async def list_public(self) -> Tuple[Coupon, ...]:
        """Coupons advertised publicly."""

    @abstractmethod
    async def statistics(self) -> CouponStatistics:
        """Collection-wide counts."""
