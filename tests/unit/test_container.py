"""Unit tests for the AdminStore composition root."""

from __future__ import annotations

import httpx
import pytest

from admin_cache.container import AdminStore
from admin_cache.shared.domain.events import CacheChanged

pytestmark = pytest.mark.unit

BASE_URL = "http://admin.test/api/v1"


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/brands/list"):
        return httpx.Response(
            200,
            json={"content": [{"brandId": 1, "name": "Acme"}], "totalElements": 1, "size": 5, "number": 0},
        )
    return httpx.Response(404, json={"message": "Not found", "errorCode": "NOT_FOUND"})


@pytest.fixture()
async def store():
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(_handler))
    admin_store = AdminStore(client=client, page_size=5)
    yield admin_store
    await client.aclose()


class TestAdminStore:
    def test_each_domain_has_its_own_cache(self, store):
        facades = [store.brands, store.coupons, store.variants, store.order_items, store.addresses]

        caches = {id(facade._cache) for facade in facades}

        assert len(caches) == 5
        assert store.brands.query.size == 5

    async def test_facades_share_bus(self, store):
        events = []

        class Recorder:
            def handle(self, event):
                events.append((event.domain, event.action))

        store.bus.subscribe(CacheChanged, Recorder())

        await store.brands.fetch_page()

        assert events == [("brand", "page_replaced")]
        assert store.brands.content[0].name == "Acme"

    async def test_store_owned_client_closed(self):
        store = AdminStore()

        async with store:
            pass

        assert store.client.is_closed

    async def test_injected_client_left_open(self, store):
        await store.aclose()

        assert store.client.is_closed is False
