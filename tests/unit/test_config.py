"""Unit tests for option loading and validation."""

import pytest

from flarekit.api import (
    CloudflareApiOptions,
    ConfigurationError,
    R2Settings,
    RateLimitingOptions,
    validate_options,
    validate_r2_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of option loading."""
    for name in (
        "CLOUDFLARE_API_TOKEN",
        "CLOUDFLARE_ACCOUNT_ID",
        "CLOUDFLARE_API_BASE_URL",
        "R2_ACCESS_KEY_ID",
        "R2_SECRET_ACCESS_KEY",
        "R2_ENDPOINT_URL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestCloudflareApiOptions:
    """Test REST option defaults and environment loading."""

    def test_defaults(self):
        """Test default base URL and disabled retries."""
        options = CloudflareApiOptions()
        assert options.api_base_url == "https://api.cloudflare.com/client/v4/"
        assert options.timeout == 30.0
        assert options.rate_limiting.effective_retries == 0
        assert options.auth_headers() == {}

    def test_from_environment(self, monkeypatch):
        """Test CLOUDFLARE_* variables populate the options."""
        monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "tok")
        monkeypatch.setenv("CLOUDFLARE_ACCOUNT_ID", "acc")
        monkeypatch.setenv("CLOUDFLARE_RATE_LIMITING__IS_ENABLED", "true")
        monkeypatch.setenv("CLOUDFLARE_RATE_LIMITING__MAX_RETRIES", "5")

        options = CloudflareApiOptions()

        assert options.api_token == "tok"
        assert options.account_id == "acc"
        assert options.rate_limiting.effective_retries == 5
        assert options.auth_headers() == {"Authorization": "Bearer tok"}

    def test_from_env_custom_prefix(self, monkeypatch):
        """Test from_env reads a different prefix."""
        monkeypatch.setenv("CF_STAGING_API_TOKEN", "staging")
        assert CloudflareApiOptions.from_env("CF_STAGING_").api_token == "staging"

    def test_rate_limiting_disabled_ignores_max_retries(self):
        """Test retries only apply when enabled."""
        assert RateLimitingOptions(max_retries=4).effective_retries == 0
        assert RateLimitingOptions(is_enabled=True, max_retries=4).effective_retries == 4


class TestValidateOptions:
    """Test REST option validation."""

    def test_valid(self):
        """Test complete options pass."""
        validate_options(CloudflareApiOptions(api_token="t", account_id="a"), require_account=True)

    def test_reports_every_failure(self):
        """Test all problems are reported together."""
        options = CloudflareApiOptions(api_token=" ", api_base_url="api.cloudflare.com")

        with pytest.raises(ConfigurationError) as exc_info:
            validate_options(options, require_account=True)

        failures = exc_info.value.failures
        assert "Cloudflare:ApiToken is required" in failures
        assert "Cloudflare:AccountId is required" in failures
        assert any(f.startswith("Cloudflare:ApiBaseUrl") for f in failures)
        assert len(failures) == 3

    def test_account_optional_by_default(self):
        """Test the account id is only required on request."""
        validate_options(CloudflareApiOptions(api_token="t"))


class TestR2Settings:
    """Test R2 settings resolution and validation."""

    def test_resolve_endpoint(self):
        """Test the account id placeholder is substituted."""
        settings = R2Settings(access_key_id="k", secret_access_key="s")
        assert settings.resolve_endpoint("abc") == "https://abc.r2.cloudflarestorage.com"

    def test_valid(self):
        """Test complete settings pass."""
        validate_r2_settings(R2Settings(access_key_id="k", secret_access_key="s"))

    def test_missing_credentials(self):
        """Test missing keys are reported under the R2 path."""
        with pytest.raises(ConfigurationError) as exc_info:
            validate_r2_settings(R2Settings())
        assert exc_info.value.failures == [
            "R2:AccessKeyId is required",
            "R2:SecretAccessKey is required",
        ]

    def test_named_settings_path(self):
        """Test failures of named settings mention the name."""
        settings = R2Settings(
            access_key_id="k", secret_access_key="s", endpoint_url="https://r2.example.com", region=""
        )
        with pytest.raises(ConfigurationError) as exc_info:
            validate_r2_settings(settings, "backups")
        assert exc_info.value.failures == [
            "R2:backups:EndpointUrl must contain the {account_id} placeholder",
            "R2:backups:Region is required",
        ]
