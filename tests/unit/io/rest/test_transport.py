"""Precise unit tests for RESTTransport.

Tests focus on HTTPClient delegation, response hooks and closing.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from flarekit.api.core import ClientClosedError
from flarekit.api.runtime.rest import RESTTransport

BASE_URL = "https://api.cloudflare.com/client/v4/"


class TestRESTTransport:
    """Test RESTTransport wrapper."""

    def test_init(self):
        """Test RESTTransport initialization."""
        transport = RESTTransport(BASE_URL, headers={"Authorization": "Bearer t"}, max_retries=3)
        assert transport._http.base_url == BASE_URL
        assert transport._http.max_retries == 3
        assert transport._http._headers == {"Authorization": "Bearer t"}
        assert not transport.closed

    def test_add_response_hook(self):
        """Test add_response_hook delegates to HTTPClient."""
        transport = RESTTransport(BASE_URL)
        hook = MagicMock()

        transport.add_response_hook(hook)

        assert hook in transport._http._response_hooks

    @pytest.mark.asyncio
    async def test_get_delegates_to_http_client(self):
        """Test get() delegates to HTTPClient."""
        transport = RESTTransport(BASE_URL)
        transport._http.get = AsyncMock(return_value={"success": True})

        result = await transport.get("zones", params={"page": 1})

        assert result == {"success": True}
        transport._http.get.assert_called_once_with("zones", params={"page": 1}, headers=None)

    @pytest.mark.asyncio
    async def test_post_delegates_to_http_client(self):
        """Test post() delegates to HTTPClient."""
        transport = RESTTransport(BASE_URL)
        transport._http.post = AsyncMock(return_value={"success": True})

        await transport.post("zones", json_body={"name": "example.com"})

        transport._http.post.assert_called_once_with(
            "zones", json={"name": "example.com"}, headers=None
        )

    @pytest.mark.asyncio
    async def test_put_and_patch_delegate(self):
        """Test put() and patch() delegate with their bodies."""
        transport = RESTTransport(BASE_URL)
        transport._http.put = AsyncMock(return_value={})
        transport._http.patch = AsyncMock(return_value={})

        await transport.put("a", json_body={"x": 1})
        await transport.patch("b", json_body={"y": 2}, headers={"H": "v"})

        transport._http.put.assert_called_once_with("a", json={"x": 1}, headers=None)
        transport._http.patch.assert_called_once_with("b", json={"y": 2}, headers={"H": "v"})

    @pytest.mark.asyncio
    async def test_delete_delegates(self):
        """Test delete() passes params and body."""
        transport = RESTTransport(BASE_URL)
        transport._http.delete = AsyncMock(return_value={})

        await transport.delete("zones/z1", params={"q": 1})

        transport._http.delete.assert_called_once_with(
            "zones/z1", params={"q": 1}, json=None, headers=None
        )

    @pytest.mark.asyncio
    async def test_requests_after_close_raise(self):
        """Test a closed transport refuses requests."""
        transport = RESTTransport(BASE_URL)
        transport._http.close = AsyncMock()
        transport._http.get = AsyncMock()

        await transport.close()

        assert transport.closed
        with pytest.raises(ClientClosedError):
            await transport.get("zones")
        transport._http.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        """Test async with closes the transport."""
        async with RESTTransport(BASE_URL) as transport:
            transport._http.close = AsyncMock()
        assert transport.closed
        transport._http.close.assert_awaited_once()
