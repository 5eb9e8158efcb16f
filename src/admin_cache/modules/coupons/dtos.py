"""Coupon DTOs.

``is_expired``, ``is_fully_used`` and ``is_active`` are computed from
``end_date``, ``usage_limit`` and ``used_count`` on every access; flags
of the same name in a server payload are ignored.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import field_validator, model_validator

from admin_cache.modules.core.dtos import CacheEntity, WireModel
from admin_cache.modules.core.formatting import as_aware, utcnow
from admin_cache.modules.coupons.constants import CouponType


class Coupon(CacheEntity):
    ID_FIELD: ClassVar[str] = "coupon_id"

    coupon_id: int
    code: str
    type: CouponType
    value: Decimal
    description: Optional[str] = None
    min_order_amount: Optional[Decimal] = None
    max_discount_amount: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    usage_limit: Optional[int] = None
    used_count: int = 0
    status: bool = True

    def is_expired_at(self, now: datetime) -> bool:
        return self.end_date is not None and as_aware(self.end_date) < as_aware(now)

    @property
    def is_expired(self) -> bool:
        return self.is_expired_at(utcnow())

    @property
    def is_fully_used(self) -> bool:
        return self.usage_limit is not None and self.used_count >= self.usage_limit

    @property
    def is_active(self) -> bool:
        return self.status and not self.is_expired and not self.is_fully_used


def _normalize_code(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Coupon code must not be empty.")
    return v.strip().upper()


class CreateCouponDTO(WireModel):
    """Immutable DTO for coupon creation.

    Validates:
    - ``code`` is non-empty (stored trimmed, upper-cased).
    - ``value`` is greater than zero, and at most 100 for percentages.
    - ``usage_limit`` is at least 1 when set.
    - ``end_date`` is after ``start_date`` when both are set.
    """

    code: str
    type: CouponType
    value: Decimal
    description: Optional[str] = None
    min_order_amount: Optional[Decimal] = None
    max_discount_amount: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    usage_limit: Optional[int] = None
    status: bool = True

    @field_validator("code")
    @classmethod
    def code_must_not_be_empty(cls, v: str) -> str:
        return _normalize_code(v)

    @field_validator("value")
    @classmethod
    def value_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Coupon value must be greater than zero.")
        return v

    @field_validator("min_order_amount", "max_discount_amount")
    @classmethod
    def amount_must_not_be_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Amount cannot be negative.")
        return v

    @field_validator("usage_limit")
    @classmethod
    def usage_limit_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Usage limit must be at least 1.")
        return v

    @model_validator(mode="after")
    def check_value_and_dates(self) -> CreateCouponDTO:
        if self.type == CouponType.PERCENTAGE and self.value > 100:
            raise ValueError("Percentage discount cannot exceed 100.")
        if self.start_date and self.end_date and as_aware(self.end_date) <= as_aware(self.start_date):
            raise ValueError("End date must be after start date.")
        return self


class UpdateCouponDTO(WireModel):
    """All fields are optional; only supplied fields are sent."""

    code: Optional[str] = None
    type: Optional[CouponType] = None
    value: Optional[Decimal] = None
    description: Optional[str] = None
    min_order_amount: Optional[Decimal] = None
    max_discount_amount: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    usage_limit: Optional[int] = None
    status: Optional[bool] = None

    @field_validator("code")
    @classmethod
    def code_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_code(v)

    @field_validator("value")
    @classmethod
    def value_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Coupon value must be greater than zero.")
        return v

    @model_validator(mode="after")
    def check_percentage(self) -> UpdateCouponDTO:
        if self.type == CouponType.PERCENTAGE and self.value is not None and self.value > 100:
            raise ValueError("Percentage discount cannot exceed 100.")
        return self


class CouponStatistics(WireModel):
    total_coupons: int = 0
    active_coupons: int = 0
    expired_coupons: int = 0
    fully_used_coupons: int = 0


class CouponStatisticsDisplay(WireModel):
    statistics: CouponStatistics
    active_percentage: str
    expired_percentage: str
    fully_used_percentage: str


class CouponDisplay(WireModel):
    coupon: Coupon
    formatted_value: str
    formatted_min_order_amount: str
    formatted_max_discount_amount: str
    display_name: str
    status_display: str
    status_text: str
    expiry_status: str
    usage_display: str
    start_date_formatted: str
    end_date_formatted: str
    end_date_relative: str
    is_active: bool
    days_left: Optional[int] = None
    urgency: Optional[str] = None
