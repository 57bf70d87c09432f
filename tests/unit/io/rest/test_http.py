"""Precise unit tests for HTTPClient.

Tests focus on session ownership, throttling, response hooks, and rate limiting.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from flarekit.api.core import RateLimitError, TransportError
from flarekit.api.utils import HTTPClient


def make_response(status: int = 200, body=None, headers: dict | None = None):
    """Build a mock aiohttp response usable as an async context manager."""
    response = AsyncMock()
    response.status = status
    response.headers = headers or {}
    response.text = AsyncMock(return_value="" if body is None else json.dumps(body))
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def make_session(*responses):
    """Build a mock session whose request() yields the given responses in order."""
    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    session.request = MagicMock(side_effect=list(responses))
    return session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session ownership."""

    def test_init(self):
        """Test HTTPClient initialization."""
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._session is None
        assert client._response_hooks == []
        assert client._throttle_until is None
        assert client.owns_session

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        """Test session property creates an owned session when needed."""
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_close_closes_owned_session(self):
        """Test close() closes a session the client created."""
        client = HTTPClient()
        session = client.session
        await client.close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_close_leaves_borrowed_session_open(self):
        """Test close() never closes a caller-provided session."""
        session = make_session()
        client = HTTPClient(session=session)

        await client.close()

        assert not client.owns_session
        session.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        """Test close() can be called multiple times."""
        client = HTTPClient()
        await client.close()
        await client.close()


class TestHTTPClientRequests:
    """Test request dispatch and body decoding."""

    @pytest.mark.asyncio
    async def test_relative_url_joined_with_base(self):
        """Test relative paths are resolved against base_url."""
        session = make_session(make_response(body={"success": True}))
        client = HTTPClient(base_url="https://api.example.com/client/v4/", session=session)

        result = await client.get("zones", params={"page": 1})

        assert result == {"success": True}
        session.request.assert_called_once_with(
            "GET",
            "https://api.example.com/client/v4/zones",
            params={"page": 1},
            json=None,
            headers={},
        )

    @pytest.mark.asyncio
    async def test_default_headers_merged(self):
        """Test per-request headers override defaults."""
        session = make_session(make_response(body={}))
        client = HTTPClient(
            base_url="https://api.example.com",
            headers={"Authorization": "Bearer t", "X-A": "1"},
            session=session,
        )

        await client.post("items", json={"a": 1}, headers={"X-A": "2"})

        _, kwargs = session.request.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer t", "X-A": "2"}
        assert kwargs["json"] == {"a": 1}

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self):
        """Test an empty body decodes to None."""
        session = make_session(make_response(body=None))
        client = HTTPClient(session=session)
        assert await client.delete("https://api.example.com/x") is None

    @pytest.mark.asyncio
    async def test_error_status_raises_transport_error(self):
        """Test non-2xx statuses raise TransportError with envelope errors."""
        body = {"success": False, "errors": [{"code": 7003, "message": "No route"}]}
        session = make_session(make_response(status=404, body=body))
        client = HTTPClient(session=session)

        with pytest.raises(TransportError) as exc_info:
            await client.get("https://api.example.com/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == 7003
        assert exc_info.value.body == body

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        """Test aiohttp client errors are wrapped."""
        session = make_session()
        session.request = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))
        client = HTTPClient(session=session)

        with pytest.raises(TransportError) as exc_info:
            await client.get("https://api.example.com/x")

        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        """Test a request hitting the total timeout is wrapped."""
        session = make_session()
        session.request = MagicMock(side_effect=asyncio.TimeoutError())
        client = HTTPClient(session=session)

        with pytest.raises(TransportError) as exc_info:
            await client.get("https://api.example.com/slow")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)


class TestHTTPClientRateLimiting:
    """Test 429 handling."""

    @pytest.mark.asyncio
    async def test_429_without_retries_raises(self):
        """Test a 429 surfaces immediately when retries are disabled."""
        session = make_session(make_response(status=429, headers={"Retry-After": "7"}))
        client = HTTPClient(session=session)

        with pytest.raises(RateLimitError) as exc_info:
            await client.get("https://api.example.com/x")

        assert exc_info.value.retry_after == 7.0
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_429_retried_after_retry_after(self):
        """Test a 429 is retried once Retry-After has elapsed."""
        session = make_session(
            make_response(status=429, headers={"Retry-After": "0.01"}),
            make_response(body={"ok": True}),
        )
        client = HTTPClient(session=session, max_retries=2)

        result = await client.get("https://api.example.com/x")

        assert result == {"ok": True}
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_429_gives_up_after_max_retries(self):
        """Test RateLimitError once retries are exhausted."""
        session = make_session(
            make_response(status=429, headers={"Retry-After": "0"}),
            make_response(status=429, headers={"Retry-After": "0"}),
        )
        client = HTTPClient(session=session, max_retries=1)

        with pytest.raises(RateLimitError):
            await client.get("https://api.example.com/x")
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_missing_retry_after_defaults(self):
        """Test a 429 without Retry-After reports the default delay."""
        session = make_session(make_response(status=429))
        client = HTTPClient(session=session)

        with pytest.raises(RateLimitError) as exc_info:
            await client.get("https://api.example.com/x")
        assert exc_info.value.retry_after == 60.0


class TestHTTPClientThrottling:
    """Test HTTPClient throttling functionality."""

    def test_set_throttle(self):
        """Test set_throttle sets throttle window."""
        client = HTTPClient()
        client.set_throttle(5.0)
        assert client._throttle_until is not None

    def test_set_throttle_zero_does_nothing(self):
        """Test set_throttle with 0 does nothing."""
        client = HTTPClient()
        client.set_throttle(5.0)
        original = client._throttle_until

        client.set_throttle(0.0)
        assert client._throttle_until == original

    def test_set_throttle_extends_existing(self):
        """Test set_throttle extends existing throttle if later."""
        client = HTTPClient()
        client.set_throttle(5.0)
        first_end = client._throttle_until

        client.set_throttle(10.0)
        assert client._throttle_until > first_end

    @pytest.mark.asyncio
    async def test_request_respects_throttle(self):
        """Test a request waits for the throttle window and clears it."""
        import time

        session = make_session(make_response(body={}))
        client = HTTPClient(session=session)
        client.set_throttle(0.05)

        start = time.time()
        await client.get("https://api.example.com/test")
        elapsed = time.time() - start

        assert elapsed >= 0.04, f"Expected at least 0.04s, got {elapsed:.6f}s"
        assert client._throttle_until is None


class TestHTTPClientResponseHooks:
    """Test HTTPClient response hooks."""

    @pytest.mark.asyncio
    async def test_response_hook_called(self):
        """Test response hooks are called for each response."""
        response = make_response(body={})
        client = HTTPClient(session=make_session(response))
        hook = MagicMock(return_value=None)
        client.add_response_hook(hook)

        await client.get("https://api.example.com/test")

        hook.assert_called_once_with(response)

    @pytest.mark.asyncio
    async def test_async_hook_delay_sets_throttle(self):
        """Test an async hook returning seconds throttles the next request."""
        client = HTTPClient(session=make_session(make_response(body={})))

        async def hook(response):
            return 2.0

        client.add_response_hook(hook)
        await client.get("https://api.example.com/test")

        assert client._throttle_until is not None

    @pytest.mark.asyncio
    async def test_failing_hook_does_not_fail_request(self):
        """Test exceptions raised by hooks are logged, not propagated."""
        client = HTTPClient(session=make_session(make_response(body={"ok": 1})))
        client.add_response_hook(MagicMock(side_effect=RuntimeError("hook broke")))

        assert await client.get("https://api.example.com/test") == {"ok": 1}
