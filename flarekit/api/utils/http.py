"""HTTP client helper."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import RateLimitError, TransportError
from ..models.envelope import Envelope

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], float | None | Awaitable[float | None]]

DEFAULT_RETRY_AFTER = 60.0


class HTTPClient:
    """Async HTTP client wrapper.

    A session created by the client is owned by it and closed by ``close()``.
    A session passed in is borrowed: the client uses it but never closes it.

    Responses with status 429 are retried after ``Retry-After`` up to
    ``max_retries`` times, then surface as RateLimitError. Any other non-2xx
    status raises TransportError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        *,
        headers: dict[str, str] | None = None,
        session: aiohttp.ClientSession | None = None,
        max_retries: int = 0,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_retries = max_retries
        self._headers = dict(headers or {})
        self._session = session
        self._owns_session = session is None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def owns_session(self) -> bool:
        return self._owns_session

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._owns_session and (self._session is None or self._session.closed):
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        assert self._session is not None
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may return a number of seconds to hold off the next request.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Delay the next request by at least ``seconds``."""
        if seconds <= 0:
            return
        until = time.time() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request."""
        return await self.request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST request."""
        return await self.request("POST", url, json=json, headers=headers)

    async def put(self, url: str, json: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self.request("PUT", url, json=json, headers=headers)

    async def patch(self, url: str, json: Any = None, headers: dict[str, str] | None = None) -> Any:
        return await self.request("PATCH", url, json=json, headers=headers)

    async def delete(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await self.request("DELETE", url, params=params, json=json, headers=headers)

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            RateLimitError: 429 still returned after ``max_retries`` retries
            TransportError: Any other non-2xx status or a connection failure
        """
        url = self._resolve(url)
        merged_headers = {**self._headers, **(headers or {})}
        attempt = 0

        while True:
            await self._wait_for_throttle()
            try:
                async with self.session.request(
                    method, url, params=params, json=json, headers=merged_headers
                ) as response:
                    await self._run_hooks(response)
                    body = await _read_body(response)

                    if response.status == 429:
                        retry_after = _retry_after_seconds(response.headers)
                        if attempt < self.max_retries:
                            attempt += 1
                            logger.warning(
                                "rate_limited",
                                extra={
                                    "method": method,
                                    "url": url,
                                    "attempt": attempt,
                                    "retry_after": retry_after,
                                },
                            )
                            self.set_throttle(retry_after)
                            continue
                        raise RateLimitError(
                            f"{method} {url} rate limited", retry_after=retry_after, body=body
                        )

                    if response.status >= 400:
                        raise TransportError(
                            f"{method} {url} returned HTTP {response.status}",
                            status_code=response.status,
                            errors=_envelope_errors(body),
                            body=body,
                        )
                    return body
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise TransportError(f"{method} {url} failed: {e}") from e

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()

    def _resolve(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        delay = self._throttle_until - time.time()
        if delay > 0:
            await asyncio.sleep(delay)
        self._throttle_until = None

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception:
                # Hooks are observers; a broken one must not fail the request.
                logger.warning("response_hook_failed", exc_info=True)
                continue
            if isinstance(delay, int | float) and delay > 0:
                self.set_throttle(float(delay))


async def _read_body(response: aiohttp.ClientResponse) -> Any:
    text = await response.text()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def _retry_after_seconds(headers: Any) -> float:
    value = headers.get("Retry-After") if headers else None
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return max(float(value), 0.0)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


def _envelope_errors(body: Any) -> list:
    if not isinstance(body, dict):
        return []
    try:
        return list(Envelope.model_validate(body).errors)
    except PydanticValidationError:
        return []
