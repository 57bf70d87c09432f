"""Top-level Cloudflare API client.

Architecture:
    CloudflareApiClient is the entry point applications hold on to. It owns
    (or borrows) one RESTTransport and hands a shared RestRunner to each
    resource API, which it creates on first access and reuses afterwards.

Design Decisions:
    - Lazy sub-APIs: constructing the client never builds resources that are
      not used, and repeated access returns the same instance
    - Ownership: a client built with ``from_options`` creates its transport
      and closes it; a client given a transport only borrows it
    - Once closed, any further request or sub-API access raises
      ClientClosedError
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any

import aiohttp

from .config import CloudflareApiOptions, validate_options
from .core.exceptions import ClientClosedError
from .models.envelope import Envelope
from .resources import AccountsApi, D1Api, DnsApi, MembersApi, RolesApi, ZonesApi
from .runtime.rest import RestEndpointSpec, RestRunner, RESTTransport

logger = logging.getLogger(__name__)


class _ClientRunner(RestRunner):
    """RestRunner that refuses to send once its client is closed."""

    def __init__(self, transport: RESTTransport, client: CloudflareApiClient) -> None:
        super().__init__(transport)
        self._client = client

    async def _send(
        self,
        spec: RestEndpointSpec,
        params: dict[str, Any],
        extra_query: dict[str, Any] | None = None,
    ) -> Envelope:
        self._client._ensure_open()
        return await super()._send(spec, params, extra_query)


class CloudflareApiClient:
    """Client for the Cloudflare REST administrative API.

    Example:
        >>> options = CloudflareApiOptions(api_token="...", account_id="...")
        >>> async with CloudflareApiClient.from_options(options) as cf:
        ...     async for zone in cf.zones.list_all_zones():
        ...         print(zone.name)
    """

    def __init__(
        self,
        transport: RESTTransport,
        options: CloudflareApiOptions,
        *,
        owns_transport: bool = False,
    ) -> None:
        """Initialize client around an existing transport.

        Args:
            transport: Transport bound to the API base URL
            options: Client options (account id is read from here)
            owns_transport: Whether ``close()`` should close ``transport``.
                Callers passing their own transport normally leave this False.
        """
        self._transport = transport
        self._options = options
        self._owns_transport = owns_transport
        self._closed = False
        self._runner = _ClientRunner(transport, self)

    @classmethod
    def from_options(
        cls,
        options: CloudflareApiOptions,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> CloudflareApiClient:
        """Validate options and build a client that owns its transport.

        A ``session`` passed here is still borrowed by the transport's HTTP
        layer and is not closed with the client.

        Raises:
            ConfigurationError: The options are incomplete
        """
        validate_options(options)
        transport = RESTTransport(
            options.api_base_url,
            timeout=options.timeout,
            headers=options.auth_headers(),
            session=session,
            max_retries=options.rate_limiting.effective_retries,
        )
        return cls(transport, options, owns_transport=True)

    @property
    def options(self) -> CloudflareApiOptions:
        return self._options

    @property
    def owns_transport(self) -> bool:
        return self._owns_transport

    @property
    def closed(self) -> bool:
        return self._closed

    @cached_property
    def accounts(self) -> AccountsApi:
        self._ensure_open()
        return AccountsApi(self._runner, self._options)

    @cached_property
    def zones(self) -> ZonesApi:
        self._ensure_open()
        return ZonesApi(self._runner, self._options)

    @cached_property
    def dns(self) -> DnsApi:
        self._ensure_open()
        return DnsApi(self._runner, self._options)

    @cached_property
    def members(self) -> MembersApi:
        self._ensure_open()
        return MembersApi(self._runner, self._options)

    @cached_property
    def roles(self) -> RolesApi:
        self._ensure_open()
        return RolesApi(self._runner, self._options)

    @cached_property
    def d1(self) -> D1Api:
        self._ensure_open()
        return D1Api(self._runner, self._options)

    async def close(self) -> None:
        """Close the client, and its transport if the client owns it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            await self._transport.close()
        logger.debug("client_closed", extra={"owns_transport": self._owns_transport})

    async def __aenter__(self) -> CloudflareApiClient:
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("CloudflareApiClient has been closed")
