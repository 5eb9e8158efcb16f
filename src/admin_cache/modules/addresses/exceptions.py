"""User-address domain exceptions."""

from __future__ import annotations

from admin_cache.modules.core.exceptions import AdminCacheError


class UserNotSelected(AdminCacheError):
    """An address operation needing a user was requested before one was bound."""
