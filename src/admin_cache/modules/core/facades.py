"""Domain facade base class (Use Cases).

A facade composes one ``EntityCache``, the derived-view selectors over
it and a ``MutationDispatcher`` bound to the domain's remote repository.
The UI reads views and dispatches intents through it; it never edits
the cache itself.

Every command follows the same shape: issue the remote call through the
dispatcher, then apply the confirmed result with one protocol operation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, TypeVar

import structlog
from pydantic import BaseModel

from admin_cache.config import settings
from admin_cache.modules.core.cache import EntityCache
from admin_cache.modules.core.dispatcher import AbortSignal, MutationDispatcher
from admin_cache.modules.core.dtos import CacheEntity
from admin_cache.modules.core.exceptions import ErrorResponse
from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.pagination import Page, PageInfo, PageRequest
from admin_cache.modules.core.repositories.interfaces import IRepository
from admin_cache.modules.core.selectors import (
    FilterSpec,
    create_selector,
    filter_entities,
    group_entities,
    sort_entities,
)
from admin_cache.shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=CacheEntity)


@dataclass(frozen=True)
class ListQuery:
    """What the list view currently asks the server for."""

    page: int = 0
    size: int = 10
    sort: Optional[str] = None
    filters: Optional[FilterModel] = None

    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, size=self.size, sort=self.sort)


def _filter_with(content: Tuple[Any, ...], filters: Any) -> Tuple[Any, ...]:
    if isinstance(filters, FilterModel):
        filters = filters.to_spec()
    return filter_entities(content, filters)


class EntityFacade(Generic[E]):
    """Shared commands, intents and views of every domain facade."""

    domain: ClassVar[str]
    # created/updated entities also become the current (detail) entity
    current_on_write: ClassVar[bool] = False
    # the server returns the whole collection as one unpaginated list
    unpaginated: ClassVar[bool] = False

    def __init__(
        self,
        repository: IRepository[E],
        *,
        cache: Optional[EntityCache] = None,
        bus: Optional[IEventBus] = None,
        page_size: Optional[int] = None,
    ) -> None:
        self._repo = repository
        self._cache = cache if cache is not None else self._build_cache()
        self._dispatcher = MutationDispatcher(self.domain, self._cache, bus)
        self._query = ListQuery(size=page_size or settings.DEFAULT_PAGE_SIZE)
        self._log = logger.bind(domain=self.domain)

        self._page_info = create_selector(PageInfo.from_page)
        self._filtered = create_selector(_filter_with)
        self._sorted = create_selector(sort_entities)
        self._grouped = create_selector(group_entities)

    def _build_cache(self) -> EntityCache:
        return EntityCache(self.domain)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def page(self) -> Page[E]:
        return self._cache.page

    @property
    def content(self) -> Tuple[E, ...]:
        return self._cache.page.content

    @property
    def current(self) -> Optional[E]:
        return self._cache.current

    @property
    def revision(self) -> int:
        return self._cache.revision

    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def page_info(self) -> PageInfo:
        return self._page_info(self._cache.page)

    @property
    def last_error(self) -> Optional[ErrorResponse]:
        return self._dispatcher.last_error

    @property
    def is_loading(self) -> bool:
        return self._dispatcher.is_loading

    def find(self, entity_id: int) -> Optional[E]:
        return self._cache.find(entity_id)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def filtered(self, filters: Optional[FilterModel | FilterSpec]) -> Tuple[E, ...]:
        return self._filtered(self.content, filters)

    def sorted(self, key: str, order: str = "asc") -> Tuple[E, ...]:
        return self._sorted(self.content, key, order)

    def grouped(self, key: str) -> Dict[Any, Tuple[E, ...]]:
        return self._grouped(self.content, key)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def fetch_page(
        self,
        page_request: Optional[PageRequest] = None,
        filters: Optional[FilterModel] = None,
        *,
        signal: Optional[AbortSignal] = None,
    ) -> Optional[Page[E]]:
        """Replace the cached page with a fresh server page.

        On failure the previous page stays in place.
        """
        if page_request is not None:
            self._query = replace(
                self._query,
                page=page_request.page,
                size=page_request.size,
                sort=page_request.sort,
            )
        if filters is not None:
            self._query = replace(self._query, filters=filters)
        return await self._dispatcher.run(
            "page_replaced",
            self._remote_list(self._query.page_request(), self._query.filters),
            self._apply_page,
            signal=signal,
        )

    async def fetch_by_id(self, id: int, *, signal: Optional[AbortSignal] = None) -> Optional[E]:
        return await self._dispatcher.run(
            "current_loaded",
            self._remote_get(id),
            self._cache.set_current,
            signal=signal,
            entity_id=id,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create(self, payload: BaseModel, *, signal: Optional[AbortSignal] = None) -> Optional[E]:
        entity = await self._dispatcher.run(
            "created", self._remote_create(payload), self._apply_created, signal=signal
        )
        if entity is not None:
            self._log.info(f"{self.domain}.created", entity_id=entity.entity_id)
        return entity

    async def update(
        self, id: int, payload: BaseModel, *, signal: Optional[AbortSignal] = None
    ) -> Optional[E]:
        entity = await self._dispatcher.run(
            "updated",
            self._remote_update(id, payload),
            self._apply_updated,
            signal=signal,
            entity_id=id,
        )
        if entity is not None:
            self._log.info(f"{self.domain}.updated", entity_id=id)
        return entity

    async def delete(self, id: int, *, signal: Optional[AbortSignal] = None) -> bool:
        """Returns ``True`` once the deletion is confirmed and applied."""
        applied = []
        await self._dispatcher.run(
            "deleted",
            self._remote_delete(id),
            lambda _: applied.append(self._apply_deleted(id)),
            signal=signal,
            entity_id=id,
        )
        if applied:
            self._log.info(f"{self.domain}.deleted", entity_id=id)
        return bool(applied)

    async def _toggle(
        self, id: int, field: str = "status", *, signal: Optional[AbortSignal] = None
    ) -> Optional[int]:
        toggled = await self._dispatcher.run(
            "status_toggled",
            self._repo.toggle_status(id),
            lambda _: self._apply_toggled(id, field),
            signal=signal,
            entity_id=id,
        )
        if toggled is not None:
            self._log.info(f"{self.domain}.status_toggled", entity_id=id)
        return toggled

    # ------------------------------------------------------------------
    # UI intents
    # ------------------------------------------------------------------

    async def set_page(self, number: int, *, signal: Optional[AbortSignal] = None) -> Optional[Page[E]]:
        self._query = replace(self._query, page=number)
        return await self.fetch_page(signal=signal)

    async def set_filter(
        self, filters: Optional[FilterModel], *, signal: Optional[AbortSignal] = None
    ) -> Optional[Page[E]]:
        self._query = replace(self._query, filters=filters, page=0)
        return await self.fetch_page(signal=signal)

    async def set_sort(
        self, field: str, order: str = "asc", *, signal: Optional[AbortSignal] = None
    ) -> Optional[Page[E]]:
        sort = PageRequest.sorted_by(field, order).sort
        self._query = replace(self._query, sort=sort, page=0)
        return await self.fetch_page(signal=signal)

    async def refresh(self, *, signal: Optional[AbortSignal] = None) -> Optional[Page[E]]:
        self._on_refresh()
        return await self.fetch_page(signal=signal)

    def clear_current(self) -> None:
        self._cache.clear_current()

    def clear_error(self) -> None:
        self._dispatcher.clear_error()

    # ------------------------------------------------------------------
    # Remote calls (overridden where a domain's endpoints need more context)
    # ------------------------------------------------------------------

    def _remote_list(self, page_request: PageRequest, filters: Optional[FilterModel]):
        return self._repo.list(page_request, filters)

    def _remote_get(self, id: int):
        return self._repo.get_by_id(id)

    def _remote_create(self, payload: BaseModel):
        return self._repo.create(payload)

    def _remote_update(self, id: int, payload: BaseModel):
        return self._repo.update(id, payload)

    def _remote_delete(self, id: int):
        return self._repo.delete(id)

    # ------------------------------------------------------------------
    # Applying confirmed results
    # ------------------------------------------------------------------

    def _apply_page(self, page: Page[E]) -> None:
        self._cache.replace_page(page)

    def _apply_created(self, entity: E) -> None:
        self._cache.insert_optimistic(entity, self.current_on_write, self.unpaginated)

    def _apply_updated(self, entity: E) -> None:
        self._cache.replace_by_id(entity, self.current_on_write)

    def _apply_deleted(self, id: int) -> int:
        return self._cache.remove_by_id(id)

    def _apply_toggled(self, id: int, field: str) -> None:
        self._cache.toggle_by_id(id, field)

    def _on_refresh(self) -> None:
        """Hook for domains that must invalidate presentation caches on refresh."""
