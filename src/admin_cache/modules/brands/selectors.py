"""Derived views over the cached brand page."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from admin_cache.modules.brands.constants import STATUS_ACTIVE, STATUS_INACTIVE
from admin_cache.modules.brands.dtos import Brand, BrandDisplay, BrandHierarchy


def brand_hierarchy(content: Sequence[Brand]) -> BrandHierarchy:
    """Counts are recomputed from the page every time it changes."""
    active = sum(1 for brand in content if brand.status)
    return BrandHierarchy(total=len(content), active=active, inactive=len(content) - active)


def active_brands(content: Sequence[Brand]) -> Tuple[Brand, ...]:
    return tuple(brand for brand in content if brand.status)


def inactive_brands(content: Sequence[Brand]) -> Tuple[Brand, ...]:
    return tuple(brand for brand in content if not brand.status)


def display_brand(brand: Brand, logo_url: Optional[str]) -> BrandDisplay:
    return BrandDisplay(
        brand=brand,
        logo_url=logo_url,
        status_display=STATUS_ACTIVE if brand.status else STATUS_INACTIVE,
    )


def display_brands(
    content: Sequence[Brand],
    generation: int,
    logo_url: Callable[[Brand], Optional[str]],
) -> Tuple[BrandDisplay, ...]:
    # generation only keys the memo; logo_url reads the live tokens
    return tuple(display_brand(brand, logo_url(brand)) for brand in content)
