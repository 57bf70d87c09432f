"""Client configuration and validation.

Options are pydantic-settings models, so they can be built programmatically
or from the environment (``CLOUDFLARE_*`` for the REST API, ``R2_*`` for the
object-storage settings). Fields are deliberately lax; ``validate_options``
and ``validate_r2_settings`` check them as a whole and report every failure
at once before any request is made.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.exceptions import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4/"
DEFAULT_GRAPHQL_API_URL = "https://api.cloudflare.com/client/v4/graphql"
DEFAULT_R2_ENDPOINT_URL = "https://{account_id}.r2.cloudflarestorage.com"
ACCOUNT_ID_PLACEHOLDER = "{account_id}"


class RateLimitingOptions(BaseModel):
    """Retry policy for HTTP 429 responses.

    Disabled by default: a 429 surfaces immediately as RateLimitError.
    """

    is_enabled: bool = False
    max_retries: int = Field(default=2, ge=0)

    @property
    def effective_retries(self) -> int:
        return self.max_retries if self.is_enabled else 0


class CloudflareApiOptions(BaseSettings):
    """Options for the Cloudflare REST API client."""

    model_config = SettingsConfigDict(
        env_prefix="CLOUDFLARE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str | None = None
    account_id: str | None = None
    graphql_api_url: str = DEFAULT_GRAPHQL_API_URL
    timeout: float = Field(default=30.0, gt=0)
    rate_limiting: RateLimitingOptions = Field(default_factory=RateLimitingOptions)

    @classmethod
    def from_env(cls, prefix: str = "CLOUDFLARE_") -> CloudflareApiOptions:
        """Read options from environment variables starting with ``prefix``."""
        return cls(_env_prefix=prefix)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_token}"} if self.api_token else {}


class R2Settings(BaseSettings):
    """Connection settings for R2's S3-compatible endpoint.

    ``endpoint_url`` is a template; ``{account_id}`` is substituted with the
    account id when the endpoint is resolved.
    """

    model_config = SettingsConfigDict(
        env_prefix="R2_",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint_url: str = DEFAULT_R2_ENDPOINT_URL
    region: str = "auto"
    access_key_id: str | None = None
    secret_access_key: str | None = None

    def resolve_endpoint(self, account_id: str) -> str:
        return self.endpoint_url.replace(ACCOUNT_ID_PLACEHOLDER, account_id)


def validate_options(options: CloudflareApiOptions, *, require_account: bool = False) -> None:
    """Check REST API options.

    Args:
        options: Options to check
        require_account: Whether an account id is needed (account-scoped APIs)

    Raises:
        ConfigurationError: Listing every problem found
    """
    failures: list[str] = []
    if not options.api_token or not options.api_token.strip():
        failures.append("Cloudflare:ApiToken is required")
    if require_account and not (options.account_id and options.account_id.strip()):
        failures.append("Cloudflare:AccountId is required")
    if not options.api_base_url.startswith(("http://", "https://")):
        failures.append(f"Cloudflare:ApiBaseUrl must be an absolute URL, got {options.api_base_url!r}")

    if failures:
        raise ConfigurationError(
            "Invalid Cloudflare API configuration: " + "; ".join(failures), failures=failures
        )


def validate_r2_settings(settings: R2Settings, name: str | None = None) -> None:
    """Check R2 settings.

    Args:
        settings: Settings to check
        name: Name of a named client configuration; failures are reported
            under ``R2:<name>`` instead of ``R2``

    Raises:
        ConfigurationError: Listing every problem found
    """
    path = f"R2:{name}" if name else "R2"
    failures: list[str] = []

    if not settings.access_key_id or not settings.access_key_id.strip():
        failures.append(f"{path}:AccessKeyId is required")
    if not settings.secret_access_key or not settings.secret_access_key.strip():
        failures.append(f"{path}:SecretAccessKey is required")
    if not settings.endpoint_url or not settings.endpoint_url.strip():
        failures.append(f"{path}:EndpointUrl is required")
    elif ACCOUNT_ID_PLACEHOLDER not in settings.endpoint_url:
        failures.append(f"{path}:EndpointUrl must contain the {ACCOUNT_ID_PLACEHOLDER} placeholder")
    if not settings.region or not settings.region.strip():
        failures.append(f"{path}:Region is required")

    if failures:
        raise ConfigurationError(
            f"Invalid R2 configuration ({path}): " + "; ".join(failures), failures=failures
        )
