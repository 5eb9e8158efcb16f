"""Derived views over cached addresses."""

from __future__ import annotations

from typing import Sequence, Tuple

from admin_cache.modules.addresses import constants
from admin_cache.modules.addresses.dtos import AddressDisplay, UserAddress
from admin_cache.modules.core.selectors import distinct_values


def full_address(address: UserAddress) -> str:
    """Server-provided full address, else the non-empty parts joined."""
    if address.full_address:
        return address.full_address
    parts = (address.address_line, address.ward, address.district, address.city)
    return ", ".join(part for part in parts if part)


def format_addresses(content: Sequence[UserAddress]) -> Tuple[AddressDisplay, ...]:
    return tuple(
        AddressDisplay(
            address=address,
            full_address=full_address(address),
            default_badge=constants.DEFAULT_BADGE if address.is_default else None,
        )
        for address in content
    )


def unique_cities(content: Sequence[UserAddress]) -> Tuple[str, ...]:
    return distinct_values(content, "city")
