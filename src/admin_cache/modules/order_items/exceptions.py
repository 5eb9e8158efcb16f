"""Order-item domain exceptions."""

from __future__ import annotations

from admin_cache.modules.core.exceptions import AdminCacheError


class OrderNotSelected(AdminCacheError):
    """An item operation was requested before any order was bound."""
