"""Base class for per-domain filter models.

A filter model plays two roles:

- ``to_params()``: query parameters for the server-side list endpoint
  (only the fields named in ``SERVER_FIELDS``).
- ``to_spec()``: the equivalent local ``FilterSpec`` for the derived
  views over the cached page.

Unset (``None``) fields are open: they match everything and are never
sent to the server.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple

from admin_cache.modules.core.dtos import WireModel
from admin_cache.modules.core.selectors import FilterSpec


def encode_param(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class FilterModel(WireModel):
    SERVER_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for name in self.SERVER_FIELDS:
            encoded = encode_param(getattr(self, name))
            if encoded is not None:
                params[type(self).model_fields[name].alias or name] = encoded
        return params

    def to_spec(self) -> FilterSpec:
        raise NotImplementedError
