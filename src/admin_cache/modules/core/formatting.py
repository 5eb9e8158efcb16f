"""Presentation helpers for the formatted views."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from admin_cache.config import settings

Number = Union[int, float, Decimal]

MILLIS_PER_DAY = 24 * 60 * 60 * 1000


def _quantize(value: Number, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_number(value: Number, places: int = 0) -> str:
    """Group thousands with commas: ``1234567.5`` -> ``'1,234,567.50'`` (places=2)."""
    return f"{_quantize(value, places):,.{places}f}"


def format_currency(
    amount: Optional[Number],
    symbol: Optional[str] = None,
    places: int = 0,
    prefix: bool = False,
    empty: str = "-",
) -> str:
    """``50000`` -> ``'50,000đ'``; ``format_currency(12.5, '$', 2, True)`` -> ``'$12.50'``."""
    if amount is None:
        return empty
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    number = format_number(amount, places)
    return f"{symbol}{number}" if prefix else f"{number}{symbol}"


def format_percentage(value: Number) -> str:
    """``15`` -> ``'15%'``, ``Decimal('12.50')`` -> ``'12.5%'``."""
    normalized = Decimal(str(value)).normalize()
    if normalized == normalized.to_integral_value():
        normalized = normalized.quantize(Decimal(1))
    return f"{normalized:f}%"


def format_ratio(part: Number, total: Number, places: int = 1) -> str:
    """Share of ``total`` as a percentage string without the sign; ``'0'`` when total is 0."""
    if not total:
        return "0"
    return f"{_quantize(Decimal(str(part)) / Decimal(str(total)) * 100, places)}"


def format_date(value: Optional[Union[date, datetime]], empty: str = "-") -> str:
    if value is None:
        return empty
    return value.strftime("%d/%m/%Y")


def as_aware(value: Union[date, datetime]) -> datetime:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_until(value: Union[date, datetime], now: Optional[datetime] = None) -> int:
    """Whole days left until ``value``, rounded up (negative when past)."""
    now = as_aware(now or utcnow())
    delta = as_aware(value) - now
    return math.ceil(delta.total_seconds() * 1000 / MILLIS_PER_DAY)


def format_relative_date(
    value: Optional[Union[date, datetime]], now: Optional[datetime] = None, empty: str = "-"
) -> str:
    """Calendar-day distance from today: ``'today'``, ``'in 3 days'``, ``'2 days ago'``."""
    if value is None:
        return empty
    today = as_aware(now or utcnow()).date()
    days = (as_aware(value).date() - today).days
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    if days == -1:
        return "yesterday"
    if days > 0:
        return f"in {days} days"
    return f"{-days} days ago"
