from admin_cache.modules.coupons.repositories.http_repository import HttpCouponRepository
from admin_cache.modules.coupons.repositories.interfaces import ICouponRepository

__all__ = ["HttpCouponRepository", "ICouponRepository"]
