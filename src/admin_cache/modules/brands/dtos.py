"""Brand DTOs.

- ``Brand``: the cached entity as returned by the server.
- ``CreateBrandDTO`` / ``UpdateBrandDTO``: request payloads, validated
  locally before submission.
- ``BrandHierarchy``: active/inactive counts over the visible page.
- ``BrandDisplay``: presentation copy of a brand (versioned logo URL).
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import field_validator

from admin_cache.modules.core.dtos import CacheEntity, WireModel


class Brand(CacheEntity):
    ID_FIELD: ClassVar[str] = "brand_id"

    brand_id: int
    name: str
    logo_url: Optional[str] = None
    description: Optional[str] = None
    status: bool = True


class CreateBrandDTO(WireModel):
    """Validates that ``name`` is non-empty (stored trimmed)."""

    name: str
    logo_url: Optional[str] = None
    description: Optional[str] = None
    status: bool = True

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Brand name must not be empty.")
        return v.strip()


class UpdateBrandDTO(WireModel):
    """Only supplied fields are sent."""

    name: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None
    status: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Brand name must not be blank.")
        return v.strip() if v is not None else v


class BrandHierarchy(WireModel):
    total: int = 0
    active: int = 0
    inactive: int = 0


class BrandDisplay(WireModel):
    brand: Brand
    logo_url: Optional[str] = None
    status_display: str
