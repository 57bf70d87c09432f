"""Shared fixtures for integration tests."""

import pytest_asyncio

from flarekit.api import CloudflareApiClient, CloudflareApiOptions


@pytest_asyncio.fixture
async def cloudflare():
    """Client built from CLOUDFLARE_* environment variables."""
    client = CloudflareApiClient.from_options(CloudflareApiOptions())
    try:
        yield client
    finally:
        await client.close()
