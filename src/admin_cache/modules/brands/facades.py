"""Brand facade.

Adds the status toggle, the active-only list and the logo cache-busting
tokens to the generic entity protocol.
"""

from __future__ import annotations

from typing import Optional, Tuple

import structlog

from admin_cache.modules.brands import constants
from admin_cache.modules.brands.dtos import Brand, BrandDisplay, BrandHierarchy
from admin_cache.modules.brands.repositories.interfaces import IBrandRepository
from admin_cache.modules.brands.selectors import (
    active_brands,
    brand_hierarchy,
    display_brands,
    inactive_brands,
)
from admin_cache.modules.core.dispatcher import AbortSignal
from admin_cache.modules.core.facades import EntityFacade
from admin_cache.modules.core.images import ImageVersions
from admin_cache.modules.core.pagination import Page
from admin_cache.modules.core.selectors import create_selector

logger = structlog.get_logger(__name__)


class BrandFacade(EntityFacade[Brand]):
    domain = constants.DOMAIN

    def __init__(self, repository: IBrandRepository, **kwargs) -> None:
        super().__init__(repository, **kwargs)
        self._repo: IBrandRepository = repository
        self._images = ImageVersions()
        self._hierarchy = create_selector(brand_hierarchy)
        self._active = create_selector(active_brands)
        self._inactive = create_selector(inactive_brands)
        self._displayed = create_selector(display_brands)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def toggle_status(self, id: int, *, signal: Optional[AbortSignal] = None) -> Optional[int]:
        return await self._toggle(id, "status", signal=signal)

    async def fetch_active(self, *, signal: Optional[AbortSignal] = None) -> Optional[Tuple[Brand, ...]]:
        """Show only active brands.

        The visible content is replaced; the page metadata of the last list
        fetch is kept.
        """
        return await self._dispatcher.run(
            "active_loaded",
            self._repo.list_active(),
            self._apply_active,
            signal=signal,
        )

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def hierarchy(self) -> BrandHierarchy:
        return self._hierarchy(self.content)

    def active(self) -> Tuple[Brand, ...]:
        return self._active(self.content)

    def inactive(self) -> Tuple[Brand, ...]:
        return self._inactive(self.content)

    def logo_url(self, brand: Brand) -> Optional[str]:
        return self._images.url_for(brand.logo_url, brand.brand_id)

    def displayed(self) -> Tuple[BrandDisplay, ...]:
        return self._displayed(self.content, self._images.generation, self.logo_url)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _apply_page(self, page: Page[Brand]) -> None:
        super()._apply_page(page)
        self._images.bump_all()

    def _apply_active(self, brands: Tuple[Brand, ...]) -> None:
        self._cache.replace_page(self._cache.page.model_copy(update={"content": brands}))
        self._images.bump_all()

    def _apply_updated(self, entity: Brand) -> None:
        super()._apply_updated(entity)
        self._images.bump(entity.brand_id)

    def _on_refresh(self) -> None:
        self._images.bump_all()
        logger.debug("brand.logos_invalidated", generation=self._images.generation)
