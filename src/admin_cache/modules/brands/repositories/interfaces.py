from __future__ import annotations

from abc import abstractmethod
from typing import Tuple

from admin_cache.modules.brands.dtos import Brand
from admin_cache.modules.core.repositories.interfaces import IToggleableRepository


class IBrandRepository(IToggleableRepository[Brand]):
    """Brand collection contract; adds the unpaginated active list."""

    @abstractmethod
    async def list_active(self) -> Tuple[Brand, ...]:
        """All brands whose status is active."""
