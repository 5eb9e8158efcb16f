"""REST implementation of the remote-service contract (httpx).

Error handling follows one rule: every failure leaves this module as a
``TransportError`` carrying the server's own message and error code when
the response has them.  Facades never see status codes or headers.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from admin_cache.config import settings
from admin_cache.modules.core.dtos import CacheEntity
from admin_cache.modules.core.exceptions import ErrorResponse, TransportError
from admin_cache.modules.core.filters import FilterModel
from admin_cache.modules.core.pagination import Page, PageRequest
from admin_cache.modules.core.repositories.interfaces import IToggleableRepository

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=CacheEntity)
M = TypeVar("M", bound=BaseModel)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def create_http_client(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build the shared client for every domain repository."""
    headers = dict(JSON_HEADERS)
    token = settings.API_TOKEN if token is None else token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url or f"{settings.API_BASE_URL}{settings.API_VERSION}",
        headers=headers,
        timeout=httpx.Timeout(timeout or settings.API_TIMEOUT),
        transport=transport,
    )


def error_from_response(response: httpx.Response) -> ErrorResponse:
    """Map an error response to the uniform shape, keeping server text verbatim."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return ErrorResponse(
            message=str(body["message"]),
            error_code=body.get("errorCode"),
        )
    return ErrorResponse(
        message=f"HTTP {response.status_code} {response.reason_phrase}".strip(),
        error_code=f"HTTP_{response.status_code}",
    )


class HttpRepository(Generic[T]):
    """Shared request plumbing for the domain repositories."""

    entity_model: ClassVar[Type[CacheEntity]]

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        log = logger.bind(method=method, path=path)
        try:
            response = await self._client.request(method, path, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            error = error_from_response(exc.response)
            log.warning("http.error_response", status_code=exc.response.status_code)
            raise TransportError(error) from exc
        except httpx.HTTPError as exc:
            log.warning("http.transport_failed", error=str(exc))
            raise TransportError.unknown(str(exc)) from exc

        log.debug("http.ok", status_code=response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError.unknown("Malformed response body.") from exc

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, model: Type[M], data: Any) -> M:
        """Validate a success body; a shape mismatch is a transport failure."""
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning(
                "http.unexpected_body", model=model.__name__, errors=exc.error_count()
            )
            raise TransportError.unknown("Unexpected response body.") from exc

    def _entity(self, data: Any) -> T:
        return self._decode(self.entity_model, data)

    def _entities(self, data: Any) -> Tuple[T, ...]:
        return tuple(self._entity(item) for item in data or ())

    def _page(self, data: Any) -> Page[T]:
        return self._decode(Page[self.entity_model], data or {})

    def _list_as_page(self, data: Any, page_request: Optional[PageRequest] = None) -> Page[T]:
        """Wrap an unpaginated list endpoint as a single first page."""
        content = self._entities(data)
        size = max(len(content), page_request.size if page_request else 1, 1)
        return Page[self.entity_model](
            content=content, total_elements=len(content), size=size, number=0
        )

    @staticmethod
    def _query(
        page_request: Optional[PageRequest],
        filters: Optional[BaseModel],
        default_sort: Optional[str] = None,
    ) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if page_request is not None:
            params.update(page_request.to_params(default_sort))
        if isinstance(filters, FilterModel):
            params.update(filters.to_params())
        return params


class HttpEntityRepository(HttpRepository[T], IToggleableRepository[T]):
    """CRUD + status toggle over a conventional set of endpoints.

    Subclasses set the path templates; ``{id}`` is substituted.
    """

    list_path: ClassVar[str]
    view_path: ClassVar[str]
    create_path: ClassVar[str]
    update_path: ClassVar[str]
    delete_path: ClassVar[str]
    toggle_path: ClassVar[Optional[str]] = None
    default_sort: ClassVar[Optional[str]] = None

    async def list(
        self, page_request: PageRequest, filters: Optional[BaseModel] = None
    ) -> Page[T]:
        data = await self._request(
            "GET", self.list_path, params=self._query(page_request, filters, self.default_sort)
        )
        return self._page(data)

    async def get_by_id(self, id: int) -> T:
        return self._entity(await self._request("GET", self.view_path.format(id=id)))

    async def create(self, payload: BaseModel) -> T:
        data = await self._request("POST", self.create_path, json=request_body(payload))
        return self._entity(data)

    async def update(self, id: int, payload: BaseModel) -> T:
        data = await self._request("PUT", self.update_path.format(id=id), json=request_body(payload))
        return self._entity(data)

    async def delete(self, id: int) -> None:
        await self._request("DELETE", self.delete_path.format(id=id))

    async def toggle_status(self, id: int) -> int:
        if self.toggle_path is None:
            raise NotImplementedError(f"{type(self).__name__} has no status toggle.")
        await self._request("PATCH", self.toggle_path.format(id=id))
        return id


def request_body(payload: BaseModel) -> Dict[str, Any]:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
