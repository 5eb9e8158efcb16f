"""Unit tests for the httpx-backed repositories.

Uses ``httpx.MockTransport`` so no network is involved.

Covers:
- Request shape: method, path, query parameters, JSON body, auth header.
- Decoding: pages, entities, unpaginated lists wrapped as a page.
- Error mapping to TransportError with the server's message verbatim.
- Success bodies of the wrong shape surface as TransportError too.
"""

from __future__ import annotations

import json

import httpx
import pytest

from admin_cache.modules.addresses.dtos import AddressDTO
from admin_cache.modules.addresses.repositories import HttpAddressRepository
from admin_cache.modules.brands.dtos import CreateBrandDTO
from admin_cache.modules.brands.facades import BrandFacade
from admin_cache.modules.brands.filters import BrandFilters
from admin_cache.modules.brands.repositories import HttpBrandRepository
from admin_cache.modules.core.exceptions import UNKNOWN_ERROR_CODE, TransportError
from admin_cache.modules.core.pagination import PageRequest
from admin_cache.modules.core.repositories.http_repository import create_http_client
from admin_cache.modules.coupons.filters import CouponFilters
from admin_cache.modules.coupons.repositories import HttpCouponRepository
from admin_cache.modules.order_items.repositories import HttpOrderItemRepository
from admin_cache.modules.variants.repositories import HttpVariantRepository

pytestmark = pytest.mark.unit

BASE_URL = "http://admin.test/api/v1"

BRAND_PAGE = {
    "content": [{"brandId": 1, "name": "Acme", "status": True}],
    "totalElements": 1,
    "size": 10,
    "number": 0,
}


class FakeServer:
    """Serves canned responses and records every request."""

    def __init__(self, status_code=200, body=None, raw=None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _client(server: FakeServer, token: str = "") -> httpx.AsyncClient:
    return create_http_client(
        base_url=BASE_URL, token=token, transport=httpx.MockTransport(server)
    )


# ===========================================================================
# Generic CRUD (brands)
# ===========================================================================


class TestEntityRepository:
    async def test_list_sends_page_filters_and_default_sort(self):
        server = FakeServer(body=BRAND_PAGE)
        repo = HttpBrandRepository(_client(server))

        page = await repo.list(PageRequest(page=1, size=5), BrandFilters(search="ac", status=True))

        request = server.last
        assert request.method == "GET"
        assert request.url.path == "/api/v1/brands/list"
        assert request.url.params["page"] == "1"
        assert request.url.params["size"] == "5"
        assert request.url.params["sort"] == "brandId,desc"
        assert request.url.params["search"] == "ac"
        assert request.url.params["status"] == "true"
        assert page.content[0].name == "Acme"

    async def test_create_posts_camel_case_body(self):
        server = FakeServer(body={"brandId": 7, "name": "Globex", "logoUrl": "http://x/l.png"})
        repo = HttpBrandRepository(_client(server))

        brand = await repo.create(CreateBrandDTO(name="  Globex ", logo_url="http://x/l.png"))

        assert server.last.method == "POST"
        assert server.last.url.path == "/api/v1/brands/create"
        body = json.loads(server.last.content)
        assert body == {"name": "Globex", "logoUrl": "http://x/l.png", "status": True}
        assert brand.brand_id == 7

    async def test_toggle_status_returns_id(self):
        server = FakeServer()
        repo = HttpBrandRepository(_client(server))

        assert await repo.toggle_status(3) == 3
        assert server.last.method == "PATCH"
        assert server.last.url.path == "/api/v1/brands/status/3"

    async def test_delete(self):
        server = FakeServer(status_code=204)
        repo = HttpBrandRepository(_client(server))

        assert await repo.delete(3) is None
        assert server.last.method == "DELETE"
        assert server.last.url.path == "/api/v1/brands/delete/3"

    async def test_bearer_token_sent(self):
        server = FakeServer(body=[])
        repo = HttpBrandRepository(_client(server, token="abc"))

        await repo.list_active()

        assert server.last.headers["Authorization"] == "Bearer abc"
        assert server.last.url.path == "/api/v1/brands/list/active"


# ===========================================================================
# Error mapping
# ===========================================================================


class TestErrors:
    async def test_server_message_kept_verbatim(self):
        server = FakeServer(
            status_code=409,
            body={"message": "Brand name already exists", "errorCode": "BRAND_DUPLICATE"},
        )
        repo = HttpBrandRepository(_client(server))

        with pytest.raises(TransportError) as exc_info:
            await repo.get_by_id(1)

        assert exc_info.value.message == "Brand name already exists"
        assert exc_info.value.error_code == "BRAND_DUPLICATE"

    async def test_status_fallback_without_body(self):
        server = FakeServer(status_code=500, raw=b"oops")
        repo = HttpBrandRepository(_client(server))

        with pytest.raises(TransportError) as exc_info:
            await repo.get_by_id(1)

        assert exc_info.value.error_code == "HTTP_500"
        assert "500" in exc_info.value.message

    async def test_network_failure(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = create_http_client(base_url=BASE_URL, transport=httpx.MockTransport(refuse))
        repo = HttpBrandRepository(client)

        with pytest.raises(TransportError) as exc_info:
            await repo.get_by_id(1)

        assert exc_info.value.error_code == UNKNOWN_ERROR_CODE

    async def test_malformed_success_body(self):
        server = FakeServer(raw=b"<html>")
        repo = HttpBrandRepository(_client(server))

        with pytest.raises(TransportError):
            await repo.get_by_id(1)

    async def test_unexpected_body_shape(self):
        server = FakeServer(body={"name": "Acme"})
        repo = HttpBrandRepository(_client(server))

        with pytest.raises(TransportError) as exc_info:
            await repo.get_by_id(1)

        assert exc_info.value.error_code == UNKNOWN_ERROR_CODE

    async def test_unexpected_page_shape_recorded_by_facade(self):
        server = FakeServer(body={"content": [{"brandId": "not-a-number"}], "totalElements": 1})
        facade = BrandFacade(HttpBrandRepository(_client(server)))

        with pytest.raises(TransportError):
            await facade.fetch_page()

        assert facade.last_error.error_code == UNKNOWN_ERROR_CODE
        assert facade.page.empty is True


# ===========================================================================
# Domain-specific endpoints
# ===========================================================================


class TestCouponRepository:
    async def test_unfiltered_list_uses_plain_endpoint(self):
        server = FakeServer(body={"content": [], "totalElements": 0, "size": 10, "number": 0})
        repo = HttpCouponRepository(_client(server))

        await repo.list(PageRequest(page=0, size=10))

        assert server.last.url.path == "/api/v1/coupons"
        assert server.last.url.params["sort"] == "code,asc"

    async def test_filtered_list_uses_search_endpoint(self):
        server = FakeServer(body={"content": [], "totalElements": 0, "size": 10, "number": 0})
        repo = HttpCouponRepository(_client(server))

        await repo.list(PageRequest(page=0, size=10), CouponFilters(code="SUMMER", is_expired=False))

        assert server.last.url.path == "/api/v1/coupons/search"
        assert server.last.url.params["code"] == "SUMMER"
        assert server.last.url.params["isExpired"] == "false"

    async def test_toggle_returns_coupon(self):
        server = FakeServer(
            body={"couponId": 4, "code": "X", "type": "FIXED_AMOUNT", "value": 10, "status": False}
        )
        repo = HttpCouponRepository(_client(server))

        coupon = await repo.toggle_status(4)

        assert coupon.status is False
        assert server.last.url.path == "/api/v1/coupons/4/toggle"

    async def test_get_by_code_uppercases(self):
        server = FakeServer(
            body={"couponId": 4, "code": "SALE", "type": "PERCENTAGE", "value": 10}
        )
        repo = HttpCouponRepository(_client(server))

        await repo.get_by_code(" sale ")

        assert server.last.url.path == "/api/v1/coupons/code/SALE"


class TestVariantRepository:
    async def test_update_stock_sends_quantity_param(self):
        server = FakeServer(body={"variantId": 2, "stockQuantity": 0})
        repo = HttpVariantRepository(_client(server))

        variant = await repo.update_stock(2, 0)

        assert server.last.method == "PATCH"
        assert server.last.url.path == "/api/v1/product-variants/2/stock"
        assert server.last.url.params["quantity"] == "0"
        assert variant.stock_quantity == 0


class TestUnpaginatedLists:
    async def test_order_items_wrapped_as_single_page(self):
        items = [
            {"orderItemId": i, "orderId": 9, "productVariantId": 1, "quantity": 1, "price": "5.00"}
            for i in range(1, 4)
        ]
        server = FakeServer(body=items)
        repo = HttpOrderItemRepository(_client(server))

        page = await repo.list_items(9)

        assert server.last.url.path == "/api/v1/api/orders/9/items"
        assert page.total_elements == 3
        assert page.number == 0
        assert page.total_pages == 1

    async def test_empty_address_list(self):
        server = FakeServer(body=[])
        repo = HttpAddressRepository(_client(server))

        page = await repo.list_for_user(5)

        assert page.empty is True
        assert page.size == 1
        assert server.last.url.path == "/api/v1/user-addresses/user/5"

    async def test_address_create_and_set_default(self):
        address = {"addressId": 8, "userId": 5, "addressLine": "1 Main St", "isDefault": True}
        server = FakeServer(body=address)
        repo = HttpAddressRepository(_client(server))

        await repo.create_for_user(5, AddressDTO(address_line="1 Main St", phone_number="0912345678"))
        assert server.last.method == "POST"
        assert json.loads(server.last.content)["phoneNumber"] == "0912345678"

        result = await repo.set_default(8)
        assert server.last.method == "PUT"
        assert server.last.url.path == "/api/v1/user-addresses/8/default"
        assert result.is_default is True
