"""Shared fixtures for resource API tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from flarekit.api import CloudflareApiOptions
from flarekit.api.runtime.rest import RestRunner, RESTTransport


def envelope(result, result_info=None):
    """Successful Cloudflare response body."""
    body = {"success": True, "errors": [], "messages": [], "result": result}
    if result_info is not None:
        body["result_info"] = result_info
    return body


@pytest.fixture
def transport():
    """Mock REST transport; set return values per test."""
    t = MagicMock(spec=RESTTransport)
    for verb in ("get", "post", "put", "patch", "delete"):
        setattr(t, verb, AsyncMock(return_value=envelope(None)))
    return t


@pytest.fixture
def runner(transport):
    return RestRunner(transport)


@pytest.fixture
def options():
    return CloudflareApiOptions(api_token="token", account_id="acc-1")
