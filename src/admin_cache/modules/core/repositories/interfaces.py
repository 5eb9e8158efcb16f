"""Generic remote-service interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the contract every domain's REST
collaborator satisfies.  Facades depend on this abstraction, never on
the HTTP client directly.  Every method either returns the confirmed
server result or raises ``TransportError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from admin_cache.modules.core.pagination import Page, PageRequest

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base remote collection contract.

    Type parameter ``T`` is the entity model of the domain
    (e.g. ``Brand``, ``Coupon``).
    """

    @abstractmethod
    async def list(
        self, page_request: PageRequest, filters: Optional[BaseModel] = None
    ) -> Page[T]:
        """Fetch one page of the collection."""

    @abstractmethod
    async def get_by_id(self, id: int) -> T:
        """Fetch a single entity."""

    @abstractmethod
    async def create(self, payload: BaseModel) -> T:
        """Create an entity and return the server's version of it."""

    @abstractmethod
    async def update(self, id: int, payload: BaseModel) -> T:
        """Update an entity and return the server's version of it."""

    @abstractmethod
    async def delete(self, id: int) -> None:
        """Delete an entity."""


class IToggleableRepository(IRepository[T]):
    """Collections whose entities carry an active/inactive status flag."""

    @abstractmethod
    async def toggle_status(self, id: int) -> int:
        """Flip the status flag server-side; returns the toggled id."""
