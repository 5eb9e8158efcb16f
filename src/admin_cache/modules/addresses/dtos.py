"""User-address DTOs."""

from __future__ import annotations

import re
from typing import ClassVar, Optional

from pydantic import field_validator

from admin_cache.modules.core.dtos import CacheEntity, WireModel

PHONE_PATTERN = re.compile(r"^\+?\d{9,13}$")
PHONE_SEPARATORS = re.compile(r"[\s.\-()]")


class UserAddress(CacheEntity):
    ID_FIELD: ClassVar[str] = "address_id"

    address_id: int
    user_id: Optional[int] = None
    address_line: str
    city: Optional[str] = None
    district: Optional[str] = None
    ward: Optional[str] = None
    phone_number: Optional[str] = None
    is_default: bool = False
    full_address: Optional[str] = None


def normalize_phone(v: str) -> str:
    """Strip separators and check the number has 9 to 13 digits."""
    compact = PHONE_SEPARATORS.sub("", v or "")
    if not PHONE_PATTERN.match(compact):
        raise ValueError("Phone number must contain 9 to 13 digits.")
    return compact


class AddressDTO(WireModel):
    """Immutable DTO for creating or replacing an address.

    Validates:
    - ``address_line`` is non-empty (stored trimmed).
    - ``phone_number`` has 9 to 13 digits, optionally prefixed by ``+``.
    """

    address_line: str
    phone_number: str
    city: Optional[str] = None
    district: Optional[str] = None
    ward: Optional[str] = None
    is_default: bool = False

    @field_validator("address_line")
    @classmethod
    def address_line_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Address line must not be empty.")
        return v.strip()

    @field_validator("phone_number")
    @classmethod
    def phone_number_must_be_valid(cls, v: str) -> str:
        return normalize_phone(v)


class AddressDisplay(WireModel):
    address: UserAddress
    full_address: str
    default_badge: Optional[str] = None
