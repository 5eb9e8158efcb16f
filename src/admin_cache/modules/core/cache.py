"""Paginated entity cache and its mutation protocol.

The protocol is a set of pure functions ``Page -> Page``.  ``EntityCache``
holds one immutable ``CacheState`` snapshot (page + current entity, plus
whatever side caches a domain adds) and replaces it with a single
assignment per operation, so a reader never observes a half-applied
edit.

Protocol operations never fail and perform no I/O.  They are invoked
only after the remote call they mirror has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Optional, TypeVar

import structlog

from admin_cache.modules.core.dtos import CacheEntity
from admin_cache.modules.core.pagination import Page

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=CacheEntity)
S = TypeVar("S", bound="CacheState")


# ---------------------------------------------------------------------------
# Pure protocol
# ---------------------------------------------------------------------------


def index_of(page: Page[E], entity_id: int) -> int:
    """Position of ``entity_id`` in ``page.content`` or -1."""
    for position, entity in enumerate(page.content):
        if entity.entity_id == entity_id:
            return position
    return -1


def insert_optimistic(page: Page[E], entity: E, grow: bool = False) -> Page[E]:
    """Reflect a confirmed create.

    Content changes only on the first page: the new entity is prepended
    and the page is trimmed back to ``size``.  The total is incremented
    whatever page is shown.

    ``grow`` is for unpaginated collections wrapped as a single page:
    ``size`` widens to fit instead of dropping the last entity.
    """
    size = page.size
    if grow:
        size = max(size, len(page.content) + 1)
    content = page.content
    if page.number == 0:
        content = ((entity,) + content)[:size]
    return page.model_copy(
        update={
            "content": content,
            "size": size,
            "total_elements": page.total_elements + 1,
        }
    )


def replace_by_id(page: Page[E], entity: E) -> Page[E]:
    """Swap in the confirmed version of ``entity``; no-op when absent."""
    position = index_of(page, entity.entity_id)
    if position < 0:
        return page
    content = page.content[:position] + (entity,) + page.content[position + 1 :]
    return page.model_copy(update={"content": content})


def toggle_by_id(page: Page[E], entity_id: int, field: str = "status") -> Page[E]:
    """Flip a boolean flag on one entity keeping every other field."""
    position = index_of(page, entity_id)
    if position < 0:
        return page
    return replace_by_id(page, toggled(page.content[position], field))


def remove_by_id(page: Page[E], entity_id: int, known: bool = False) -> Page[E]:
    """Reflect a confirmed delete.

    The entity drops out of the content when it is on the page.  The
    total drops when it is on the page or ``known`` says the cache held
    it elsewhere (the current entity while another page is shown).
    Otherwise the page is returned untouched, so a repeated removal is a
    no-op.
    """
    position = index_of(page, entity_id)
    if position < 0 and not known:
        return page
    content = page.content
    if position >= 0:
        content = content[:position] + content[position + 1 :]
    return page.model_copy(
        update={
            "content": content,
            "total_elements": max(page.total_elements - 1, 0),
        }
    )


def toggled(entity: E, field: str) -> E:
    return entity.model_copy(update={field: not getattr(entity, field)})


def same_entity(left: Optional[CacheEntity], right_id: int) -> bool:
    return left is not None and left.entity_id == right_id


# ---------------------------------------------------------------------------
# Stateful cache
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CacheState(Generic[E]):
    """Immutable snapshot of one domain cache."""

    page: Page[E]
    current: Optional[E] = None
    revision: int = 0


class EntityCache(Generic[E]):
    """Owns one ``Page`` plus an optional current (detail) entity.

    Domain caches extend the snapshot type and override the ``_after_*``
    hooks; a hook's edits land in the same swap as the page patch.
    """

    def __init__(self, domain: str, state: Optional[CacheState] = None) -> None:
        self.domain = domain
        self._state = state if state is not None else self._initial_state()
        self._log = logger.bind(domain=domain)

    def _initial_state(self) -> CacheState:
        return CacheState(page=Page())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def page(self) -> Page[E]:
        return self._state.page

    @property
    def current(self) -> Optional[E]:
        return self._state.current

    @property
    def revision(self) -> int:
        return self._state.revision

    def find(self, entity_id: int) -> Optional[E]:
        """Look an entity up on the visible page, then in ``current``."""
        position = index_of(self.page, entity_id)
        if position >= 0:
            return self.page.content[position]
        if same_entity(self.current, entity_id):
            return self.current
        return None

    # ------------------------------------------------------------------
    # Protocol
    # ------------------------------------------------------------------

    def replace_page(self, page: Page[E], clear_current: bool = False) -> int:
        state = replace(self._state, page=page)
        if clear_current:
            state = replace(state, current=None)
        self._log.debug(
            "cache.page_replaced",
            number=page.number,
            size=len(page.content),
            total_elements=page.total_elements,
        )
        return self._commit(self._after_page_replaced(state))

    def insert_optimistic(
        self, entity: E, make_current: bool = False, grow: bool = False
    ) -> int:
        state = replace(
            self._state,
            page=insert_optimistic(self._state.page, entity, grow),
            current=entity if make_current else self._refresh_current(entity),
        )
        self._log.debug("cache.inserted", entity_id=entity.entity_id)
        return self._commit(self._after_upsert(state, entity))

    def replace_by_id(self, entity: E, make_current: bool = False) -> int:
        if index_of(self._state.page, entity.entity_id) < 0:
            self._log.debug("cache.replace_missing", entity_id=entity.entity_id)
        state = replace(
            self._state,
            page=replace_by_id(self._state.page, entity),
            current=entity if make_current else self._refresh_current(entity),
        )
        return self._commit_changed(self._after_upsert(state, entity))

    def toggle_by_id(self, entity_id: int, field: str = "status") -> int:
        current = self._state.current
        if same_entity(current, entity_id):
            current = toggled(current, field)
        state = replace(
            self._state,
            page=toggle_by_id(self._state.page, entity_id, field),
            current=current,
        )
        entity = self._find_in(state, entity_id)
        if entity is not None:
            state = self._after_upsert(state, entity)
        return self._commit_changed(state)

    def remove_by_id(self, entity_id: int) -> int:
        current = self._state.current
        held = same_entity(current, entity_id)
        state = replace(
            self._state,
            page=remove_by_id(self._state.page, entity_id, known=held),
            current=None if held else current,
        )
        self._log.debug("cache.removed", entity_id=entity_id)
        return self._commit_changed(self._after_remove(state, entity_id))

    def set_current(self, entity: Optional[E]) -> int:
        return self._commit(replace(self._state, current=entity))

    def clear_current(self) -> int:
        return self.set_current(None)

    def update_state(self, **changes) -> int:
        """Swap in new values for side-cache fields of a domain snapshot."""
        return self._commit(replace(self._state, **changes))

    # ------------------------------------------------------------------
    # Domain hooks
    # ------------------------------------------------------------------

    def _after_page_replaced(self, state: S) -> S:
        return state

    def _after_upsert(self, state: S, entity: E) -> S:
        return state

    def _after_remove(self, state: S, entity_id: int) -> S:
        return state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh_current(self, entity: E) -> Optional[E]:
        if same_entity(self._state.current, entity.entity_id):
            return entity
        return self._state.current

    @staticmethod
    def _find_in(state: CacheState, entity_id: int) -> Optional[E]:
        position = index_of(state.page, entity_id)
        if position >= 0:
            return state.page.content[position]
        if same_entity(state.current, entity_id):
            return state.current
        return None

    def _commit(self, state: CacheState) -> int:
        self._state = replace(state, revision=self._state.revision + 1)
        return self._state.revision

    def _commit_changed(self, state: CacheState) -> int:
        """Commit unless the operation left the snapshot as it was."""
        if state == self._state:
            return self._state.revision
        return self._commit(state)
