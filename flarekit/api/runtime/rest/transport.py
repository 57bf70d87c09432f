"""REST transport wrapping HTTPClient."""

from __future__ import annotations

from typing import Any

import aiohttp

from ...core.exceptions import ClientClosedError
from ...utils.http import HTTPClient, ResponseHook


class RESTTransport:
    """Thin request layer over HTTPClient bound to one API base URL.

    Once closed, every request raises ClientClosedError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        session: aiohttp.ClientSession | None = None,
        max_retries: int = 0,
    ) -> None:
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            session=session,
            max_retries=max_retries,
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._http.add_response_hook(hook)

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        self._ensure_open()
        return await self._http.get(path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        self._ensure_open()
        return await self._http.post(path, json=json_body, headers=headers)

    async def put(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        self._ensure_open()
        return await self._http.put(path, json=json_body, headers=headers)

    async def patch(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        self._ensure_open()
        return await self._http.patch(path, json=json_body, headers=headers)

    async def delete(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        self._ensure_open()
        return await self._http.delete(path, params=params, json=json_body, headers=headers)

    async def close(self) -> None:
        self._closed = True
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("REST transport has been closed")
