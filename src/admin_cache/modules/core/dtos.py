"""Base models shared by every domain.

Entities mirror the server's JSON (camelCase on the wire, snake_case in
Python) and are immutable: the cache only ever swaps whole instances.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable model with camelCase aliases for the REST payloads."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class CacheEntity(WireModel):
    """An entity held by an ``EntityCache``.

    Subclasses name the attribute carrying the server-assigned id in
    ``ID_FIELD``.
    """

    ID_FIELD: ClassVar[str] = "id"

    @property
    def entity_id(self) -> int:
        return getattr(self, self.ID_FIELD)
