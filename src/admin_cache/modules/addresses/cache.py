"""Address cache keeping at most one default address per user.

A write that lands an address with ``is_default`` set rewrites every
other cached address (page and current) to ``is_default = False`` in
the same swap.  ``default`` and ``count`` are kept in the snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from admin_cache.modules.addresses.dtos import UserAddress
from admin_cache.modules.core.cache import CacheState, EntityCache, same_entity
from admin_cache.modules.core.pagination import Page


@dataclass(frozen=True)
class AddressCacheState(CacheState[UserAddress]):
    default: Optional[UserAddress] = None
    count: int = 0


def _demoted(address: Optional[UserAddress], default_id: int) -> Optional[UserAddress]:
    if address is None or not address.is_default or address.address_id == default_id:
        return address
    return address.model_copy(update={"is_default": False})


def make_default(state: AddressCacheState, address: UserAddress) -> AddressCacheState:
    """Clear the default flag on every sibling of ``address``."""
    content = tuple(_demoted(item, address.address_id) for item in state.page.content)
    return replace(
        state,
        page=state.page.model_copy(update={"content": content}),
        current=_demoted(state.current, address.address_id),
        default=address,
    )


class AddressCache(EntityCache[UserAddress]):
    def _initial_state(self) -> AddressCacheState:
        return AddressCacheState(page=Page())

    def _after_page_replaced(self, state: AddressCacheState) -> AddressCacheState:
        default = next((item for item in state.page.content if item.is_default), None)
        return replace(state, default=default, count=state.page.total_elements)

    def _after_upsert(self, state: AddressCacheState, entity: UserAddress) -> AddressCacheState:
        if entity.is_default:
            state = make_default(state, entity)
            self._log.debug("cache.default_changed", entity_id=entity.address_id)
        elif same_entity(state.default, entity.address_id):
            state = replace(state, default=None)
        return replace(state, count=state.page.total_elements)

    def _after_remove(self, state: AddressCacheState, entity_id: int) -> AddressCacheState:
        default = None if same_entity(state.default, entity_id) else state.default
        return replace(state, default=default, count=state.page.total_elements)
