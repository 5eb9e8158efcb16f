import pytest

from admin_cache.shared.domain.events import CacheChanged
from admin_cache.shared.infrastructure.bus import InMemoryEventBus


class RecordingHandler:
    """Collects every event it is handed."""

    def __init__(self) -> None:
        self.events = []

    def handle(self, event) -> None:
        self.events.append(event)

    @property
    def actions(self):
        return [event.action for event in self.events]


@pytest.fixture()
def event_bus():
    return InMemoryEventBus()


@pytest.fixture()
def cache_events(event_bus):
    """Handler subscribed to ``CacheChanged`` on the ``event_bus`` fixture."""
    handler = RecordingHandler()
    event_bus.subscribe(CacheChanged, handler)
    return handler
