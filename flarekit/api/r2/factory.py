"""Construction of R2 clients from settings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from ..config import R2Settings, validate_r2_settings
from ..core.exceptions import ConfigurationError
from .backend import ObjectStorageBackend, R2Endpoint
from .client import R2Client

logger = logging.getLogger(__name__)


BackendFactory = Callable[[R2Endpoint], ObjectStorageBackend]


class R2ClientFactory:
    """Builds R2Clients for named settings, one backend per client.

    Settings are validated when a client is requested, so a misconfigured
    name fails before any request is made. Each client owns the backend
    built for it and closes it with ``close()``.

    Example:
        factory = R2ClientFactory(S3Backend, account_id, settings=R2Settings())
        async with factory.create_client() as r2:
            await r2.upload("bucket", "key", b"data")
    """

    def __init__(
        self,
        backend_factory: BackendFactory,
        account_id: str,
        settings: R2Settings | None = None,
        named_settings: dict[str, R2Settings] | None = None,
    ) -> None:
        self._backend_factory = backend_factory
        self._account_id = account_id
        self._default = settings
        self._named = dict(named_settings or {})

    def create_client(self, name: str | None = None) -> R2Client:
        """Create a client for the default settings or the settings called ``name``."""
        if not self._account_id or not self._account_id.strip():
            raise ConfigurationError(
                "An account id is required to build the R2 endpoint",
                failures=["Cloudflare:AccountId is required"],
            )
        settings = self._settings_for(name)
        validate_r2_settings(settings, name)

        endpoint = R2Endpoint(
            endpoint_url=settings.resolve_endpoint(self._account_id),
            region=settings.region,
            access_key_id=settings.access_key_id or "",
            secret_access_key=settings.secret_access_key or "",
        )
        logger.debug("r2_client_created", extra={"name": name, "endpoint_url": endpoint.endpoint_url})
        return R2Client(self._backend_factory(endpoint), owns_backend=True)

    def _settings_for(self, name: str | None) -> R2Settings:
        if name is None:
            if self._default is None:
                raise ConfigurationError("No default R2 settings configured", failures=["R2 is missing"])
            return self._default
        try:
            return self._named[name]
        except KeyError:
            raise ConfigurationError(
                f"No R2 settings named {name!r}", failures=[f"R2:{name} is missing"]
            ) from None
