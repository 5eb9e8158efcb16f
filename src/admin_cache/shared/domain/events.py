"""Cache change events published after every applied mutation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable)."""

    domain: str
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)


@dataclass(frozen=True)
class CacheChanged(DomainEvent):
    """Raised when a domain cache swapped in a new snapshot.

    ``action`` names the intent that caused it (``created``, ``updated``,
    ``deleted``, ``page_replaced`` ...).  ``entity_id`` is set for
    single-entity mutations.
    """

    action: str = ""
    entity_id: Optional[int] = None
    revision: int = 0
