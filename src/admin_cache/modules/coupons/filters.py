from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Optional, Tuple

from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.formatting import utcnow
from admin_cache.modules.core.selectors import DateRange, FieldEquals, FilterSpec, TextSearch
from admin_cache.modules.coupons.constants import CouponType


@dataclass(frozen=True)
class ExpiredAt:
    """Matches coupons whose expiry state at ``as_of`` equals ``value``."""

    value: Optional[bool]
    as_of: datetime

    def matches(self, entity: Any) -> bool:
        if self.value is None:
            return True
        return entity.is_expired_at(self.as_of) == self.value


class CouponFilters(FilterModel):
    """Coupon list filters.

    The date range keeps coupons whose start and end dates both fall
    inside it; coupons without a start or end date are not excluded by
    the missing bound.  ``type`` and ``is_fully_used`` only narrow the
    cached page; the search endpoint does not accept them.
    """

    SERVER_FIELDS: ClassVar[Tuple[str, ...]] = (
        "code",
        "status",
        "is_expired",
        "start_date",
        "end_date",
    )

    code: Optional[str] = None
    status: Optional[bool] = None
    type: Optional[CouponType] = None
    is_expired: Optional[bool] = None
    is_fully_used: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def to_spec(self, as_of: Optional[datetime] = None) -> FilterSpec:
        """Local predicates; expiry is judged at ``as_of`` (default: now)."""
        return FilterSpec(
            predicates=(
                TextSearch(self.code, ("code",)),
                FieldEquals("status", self.status),
                FieldEquals("type", self.type),
                ExpiredAt(self.is_expired, as_of if as_of is not None else utcnow()),
                FieldEquals("is_fully_used", self.is_fully_used),
                DateRange("start_date", self.start_date, self.end_date),
                DateRange("end_date", self.start_date, self.end_date),
            )
        )
