"""Unit tests for MutationDispatcher.

Covers:
- Success: result applied, CacheChanged published with the new revision.
- Failure: TransportError re-raised, recorded, cache untouched.
- Abort: result discarded after an abandoned call.
- Loading flag while a call is in flight.
"""

from __future__ import annotations

import asyncio

import pytest

from admin_cache.modules.brands.dtos import Brand
from admin_cache.modules.core.cache import EntityCache
from admin_cache.modules.core.dispatcher import AbortSignal, MutationDispatcher
from admin_cache.modules.core.exceptions import ErrorResponse, TransportError
from admin_cache.modules.core.pagination import Page

pytestmark = pytest.mark.unit


async def _returns(value):
    return value


async def _fails(message="Brand name already exists", code="DUPLICATE_NAME"):
    raise TransportError(ErrorResponse(message=message, error_code=code))


@pytest.fixture()
def cache():
    brand_cache = EntityCache("brand")
    brand_cache.replace_page(
        Page[Brand](content=(Brand(brand_id=1, name="Acme"),), total_elements=1, size=10)
    )
    return brand_cache


@pytest.fixture()
def dispatcher(cache, event_bus):
    return MutationDispatcher("brand", cache, event_bus)


# ===========================================================================
# Success
# ===========================================================================


class TestSuccess:
    async def test_applies_and_returns_result(self, dispatcher, cache):
        brand = Brand(brand_id=2, name="Globex")

        result = await dispatcher.run("created", _returns(brand), cache.insert_optimistic)

        assert result is brand
        assert cache.page.content[0] is brand

    async def test_publishes_cache_changed(self, dispatcher, cache, cache_events):
        await dispatcher.run("deleted", _returns(None), lambda _: cache.remove_by_id(1), entity_id=1)

        assert len(cache_events.events) == 1
        event = cache_events.events[0]
        assert event.domain == "brand"
        assert event.action == "deleted"
        assert event.entity_id == 1
        assert event.revision == cache.revision

    async def test_no_event_when_nothing_applied(self, dispatcher, cache_events):
        await dispatcher.run("ping", _returns(1))

        assert cache_events.events == []

    async def test_success_clears_previous_error(self, dispatcher):
        with pytest.raises(TransportError):
            await dispatcher.run("created", _fails())

        await dispatcher.run("created", _returns(None))

        assert dispatcher.last_error is None


# ===========================================================================
# Failure
# ===========================================================================


class TestFailure:
    async def test_error_reraised_and_recorded(self, dispatcher):
        with pytest.raises(TransportError) as exc_info:
            await dispatcher.run("created", _fails())

        assert exc_info.value.message == "Brand name already exists"
        assert dispatcher.last_error == ErrorResponse(
            message="Brand name already exists", error_code="DUPLICATE_NAME"
        )

    async def test_cache_untouched(self, dispatcher, cache, cache_events):
        state = cache.state

        with pytest.raises(TransportError):
            await dispatcher.run("deleted", _fails(), lambda _: cache.remove_by_id(1))

        assert cache.state is state
        assert cache_events.events == []
        assert dispatcher.is_loading is False

    def test_clear_error(self, dispatcher):
        dispatcher.last_error = ErrorResponse(message="boom")

        dispatcher.clear_error()

        assert dispatcher.last_error is None


# ===========================================================================
# Abort and loading
# ===========================================================================


class TestAbort:
    async def test_aborted_result_discarded(self, dispatcher, cache, cache_events):
        signal = AbortSignal()
        state = cache.state

        async def abandoned():
            signal.abort("unmounted")
            return Brand(brand_id=3, name="Late")

        result = await dispatcher.run(
            "created", abandoned(), cache.insert_optimistic, signal=signal
        )

        assert result is None
        assert cache.state is state
        assert cache_events.events == []

    async def test_live_signal_applies(self, dispatcher, cache):
        signal = AbortSignal()

        await dispatcher.run(
            "created", _returns(Brand(brand_id=4, name="Live")), cache.insert_optimistic, signal=signal
        )

        assert cache.find(4) is not None

    def test_signal_records_reason(self):
        signal = AbortSignal()

        signal.abort("route changed")

        assert signal.aborted is True
        assert signal.reason == "route changed"


class TestLoading:
    async def test_is_loading_while_in_flight(self, dispatcher):
        release = asyncio.Event()

        async def slow():
            await release.wait()
            return None

        task = asyncio.ensure_future(dispatcher.run("page_replaced", slow()))
        await asyncio.sleep(0)
        assert dispatcher.is_loading is True

        release.set()
        await task

        assert dispatcher.is_loading is False
