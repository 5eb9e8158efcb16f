"""Derived views over cached coupons.

Views that depend on the clock take an ``as_of`` argument: the facade
passes the current time truncated to the minute, so a view is reused
within a minute and recomputed afterwards.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Tuple

from admin_cache.config import settings
from admin_cache.modules.core.formatting import (
    days_until,
    format_currency,
    format_date,
    format_percentage,
    format_ratio,
    format_relative_date,
)
from admin_cache.modules.core.selectors import FilterSpec, filter_entities
from admin_cache.modules.coupons import constants
from admin_cache.modules.coupons.constants import CouponType
from admin_cache.modules.coupons.dtos import (
    Coupon,
    CouponDisplay,
    CouponStatistics,
    CouponStatisticsDisplay,
)
from admin_cache.modules.coupons.filters import CouponFilters


def formatted_value(coupon: Coupon) -> str:
    if coupon.type == CouponType.PERCENTAGE:
        return format_percentage(coupon.value)
    return format_currency(coupon.value)


def status_text(coupon: Coupon, as_of: datetime) -> str:
    if not coupon.status:
        return constants.STATUS_INACTIVE
    if coupon.is_expired_at(as_of):
        return constants.STATUS_EXPIRED
    if coupon.is_fully_used:
        return constants.STATUS_FULLY_USED
    return constants.STATUS_ACTIVE


def usage_display(coupon: Coupon) -> str:
    limit = coupon.usage_limit if coupon.usage_limit is not None else constants.UNLIMITED
    return f"{coupon.used_count}/{limit}"


def expiry_status(coupon: Coupon, as_of: datetime) -> str:
    if coupon.is_expired_at(as_of):
        return constants.STATUS_EXPIRED
    if coupon.end_date is None:
        return constants.NO_EXPIRY
    return f"Expires on {format_date(coupon.end_date)}"


def format_coupon(coupon: Coupon, as_of: datetime) -> CouponDisplay:
    value = formatted_value(coupon)
    days_left: Optional[int] = None
    if coupon.end_date is not None:
        remaining = days_until(coupon.end_date, as_of)
        days_left = remaining if remaining > 0 else None
    urgent = days_left is not None and days_left <= settings.COUPON_URGENCY_DAYS
    expired = coupon.is_expired_at(as_of)
    return CouponDisplay(
        coupon=coupon,
        formatted_value=value,
        formatted_min_order_amount=format_currency(coupon.min_order_amount),
        formatted_max_discount_amount=format_currency(coupon.max_discount_amount),
        display_name=f"{coupon.code} ({value})",
        status_display=constants.STATUS_ACTIVE if coupon.status else constants.STATUS_INACTIVE,
        status_text=status_text(coupon, as_of),
        expiry_status=expiry_status(coupon, as_of),
        usage_display=usage_display(coupon),
        start_date_formatted=format_date(coupon.start_date),
        end_date_formatted=format_date(coupon.end_date),
        end_date_relative=format_relative_date(coupon.end_date, as_of),
        is_active=coupon.status and not expired and not coupon.is_fully_used,
        days_left=days_left,
        urgency=constants.EXPIRING_SOON if urgent else None,
    )


def format_coupons(content: Sequence[Coupon], as_of: datetime) -> Tuple[CouponDisplay, ...]:
    return tuple(format_coupon(coupon, as_of) for coupon in content)


def format_current(current: Optional[Coupon], as_of: datetime) -> Optional[CouponDisplay]:
    return format_coupon(current, as_of) if current is not None else None


def filter_coupons(
    content: Sequence[Coupon], filters: Optional[CouponFilters | FilterSpec], as_of: datetime
) -> Tuple[Coupon, ...]:
    spec = filters.to_spec(as_of) if isinstance(filters, CouponFilters) else filters
    return filter_entities(content, spec)


def active_coupons(content: Sequence[Coupon], as_of: datetime) -> Tuple[Coupon, ...]:
    return tuple(
        coupon
        for coupon in content
        if coupon.status and not coupon.is_expired_at(as_of) and not coupon.is_fully_used
    )


def expired_coupons(content: Sequence[Coupon], as_of: datetime) -> Tuple[Coupon, ...]:
    return tuple(coupon for coupon in content if coupon.is_expired_at(as_of))


def coupons_of_type(content: Sequence[Coupon], coupon_type: CouponType) -> Tuple[Coupon, ...]:
    return tuple(coupon for coupon in content if coupon.type == coupon_type)


def format_statistics(statistics: Optional[CouponStatistics]) -> Optional[CouponStatisticsDisplay]:
    if statistics is None:
        return None
    total = statistics.total_coupons
    return CouponStatisticsDisplay(
        statistics=statistics,
        active_percentage=format_ratio(statistics.active_coupons, total),
        expired_percentage=format_ratio(statistics.expired_coupons, total),
        fully_used_percentage=format_ratio(statistics.fully_used_coupons, total),
    )
