"""Unit tests for CacheChanged events and the in-memory bus."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from admin_cache.shared.domain.events import CacheChanged, DomainEvent

pytestmark = pytest.mark.unit


def test_event_is_immutable_and_named():
    event = CacheChanged(domain="brand", action="created", entity_id=1, revision=3)

    assert event.event_name == "CacheChanged"
    assert event.occurred_on.tzinfo is not None
    with pytest.raises(FrozenInstanceError):
        event.action = "deleted"


def test_handlers_run_in_subscription_order(event_bus):
    calls = []

    class Handler:
        def __init__(self, name):
            self.name = name

        def handle(self, event):
            calls.append((self.name, event.action))

    event_bus.subscribe(CacheChanged, Handler("first"))
    event_bus.subscribe(CacheChanged, Handler("second"))

    event_bus.publish(CacheChanged(domain="brand", action="updated"))

    assert calls == [("first", "updated"), ("second", "updated")]


def test_subscribe_is_idempotent_and_unsubscribe(event_bus, cache_events):
    event_bus.subscribe(CacheChanged, cache_events)
    event_bus.publish(CacheChanged(domain="coupon", action="created"))
    assert len(cache_events.events) == 1

    event_bus.unsubscribe(CacheChanged, cache_events)
    event_bus.publish(CacheChanged(domain="coupon", action="deleted"))
    assert len(cache_events.events) == 1


def test_handlers_keyed_by_event_class(event_bus, cache_events):
    event_bus.publish(DomainEvent(domain="brand"))

    assert cache_events.events == []
