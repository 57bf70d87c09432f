"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...core.exceptions import ProviderError, ValidationError
from ...models.envelope import Envelope
from ..paging import Page, PageRequest, PageStream, PaginationPolicy, extract_result_info
from .envelope import decode_envelope
from .transport import RESTTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST" | "PUT" | "PATCH" | "DELETE"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], Any] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # List endpoints declare how they paginate; single-resource endpoints leave it unset
    pagination: PaginationPolicy | None = None


class ResponseAdapter:
    def parse(self, envelope: Envelope, params: dict[str, Any]) -> Any:
        return envelope.result

    def parse_items(self, envelope: Envelope, params: dict[str, Any]) -> list[Any]:
        """Items of one page of a list endpoint."""
        return list(self.parse(envelope, params) or [])


class ModelAdapter(ResponseAdapter):
    """Validates ``result`` into a pydantic model (or a list of them).

    Args:
        model: Model type of a single item
        many: Whether ``result`` is a list of items
        items_key: Key under which a list endpoint nests its items inside
            ``result`` (e.g. ``"buckets"``)
    """

    def __init__(self, model: type, *, many: bool = False, items_key: str | None = None) -> None:
        self._model = model
        self._many = many
        self._items_key = items_key
        self._type_adapter: TypeAdapter[Any] = TypeAdapter(list[model] if many else model)

    def parse(self, envelope: Envelope, params: dict[str, Any]) -> Any:
        raw = envelope.result
        if self._items_key is not None:
            raw = raw.get(self._items_key) if isinstance(raw, dict) else None
        if raw is None and self._many:
            raw = []
        try:
            return self._type_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise ProviderError(
                f"Unexpected result shape for {self._model.__name__}", body=envelope.result
            ) from e


class RestRunner:
    def __init__(self, transport: RESTTransport) -> None:
        self._t = transport

    @property
    def transport(self) -> RESTTransport:
        return self._t

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        envelope = await self._send(spec, params)
        return adapter.parse(envelope, params)

    async def fetch_page(
        self,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        request: PageRequest,
    ) -> Page[Any]:
        """Fetch one page of a list endpoint."""
        policy = _require_pagination(spec)
        envelope = await self._send(spec, params, extra_query=policy.build_query(request))
        return Page(
            items=adapter.parse_items(envelope, params),
            info=extract_result_info(envelope.result_info, policy.style),
        )

    def paginate(
        self,
        *,
        spec: RestEndpointSpec,
        adapter: ResponseAdapter,
        params: dict[str, Any],
        per_page: int | None = None,
        max_pages: int | None = None,
        cancel: asyncio.Event | None = None,
    ) -> PageStream[Any]:
        """Lazily traverse every page of a list endpoint."""
        policy = _require_pagination(spec)

        async def fetch(request: PageRequest) -> Page[Any]:
            return await self.fetch_page(spec=spec, adapter=adapter, params=params, request=request)

        return PageStream(
            fetch,
            style=policy.style,
            per_page=per_page or policy.per_page,
            trust_total_pages=policy.trust_total_pages,
            max_pages=max_pages or policy.max_pages,
            cancel=cancel,
            operation=spec.id,
        )

    async def _send(
        self,
        spec: RestEndpointSpec,
        params: dict[str, Any],
        extra_query: dict[str, Any] | None = None,
    ) -> Envelope:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        if extra_query:
            query = {**(query or {}), **extra_query}
        if query is not None:
            query = {k: v for k, v in query.items() if v is not None}
        body = spec.build_body(params) if spec.build_body else None
        headers = spec.build_headers(params) if spec.build_headers else None

        method = spec.method.upper()
        if method == "GET":
            data = await self._t.get(path, params=query, headers=headers)
        elif method == "POST":
            data = await self._t.post(path, json_body=body, headers=headers)
        elif method == "PUT":
            data = await self._t.put(path, json_body=body, headers=headers)
        elif method == "PATCH":
            data = await self._t.patch(path, json_body=body, headers=headers)
        elif method == "DELETE":
            data = await self._t.delete(path, params=query, json_body=body, headers=headers)
        else:
            raise ValidationError(f"Unsupported HTTP method {spec.method!r} for {spec.id}")

        return decode_envelope(data)


def _require_pagination(spec: RestEndpointSpec) -> PaginationPolicy:
    if spec.pagination is None:
        raise ValidationError(f"Endpoint {spec.id} is not paginated")
    return spec.pagination
