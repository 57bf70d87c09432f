"""Unit tests for R2ClientFactory."""

import pytest

from flarekit.api import ConfigurationError, R2Settings
from flarekit.api.r2 import R2Client, R2ClientFactory, R2Endpoint


class TestR2ClientFactory:
    """Test client construction from settings."""

    def test_default_client(self, backend):
        """Test the default settings resolve the account endpoint."""
        endpoints: list[R2Endpoint] = []

        def build(endpoint):
            endpoints.append(endpoint)
            return backend

        factory = R2ClientFactory(
            build, "acc123", settings=R2Settings(access_key_id="k", secret_access_key="s")
        )

        client = factory.create_client()

        assert isinstance(client, R2Client)
        assert endpoints == [
            R2Endpoint(
                endpoint_url="https://acc123.r2.cloudflarestorage.com",
                region="auto",
                access_key_id="k",
                secret_access_key="s",
            )
        ]

    def test_named_client(self, backend):
        """Test named settings are looked up by name."""
        named = {"eu": R2Settings(access_key_id="k", secret_access_key="s", region="weur")}
        factory = R2ClientFactory(lambda e: backend, "acc", named_settings=named)
        assert isinstance(factory.create_client("eu"), R2Client)

    def test_unknown_name(self, backend):
        """Test a missing named configuration is reported."""
        factory = R2ClientFactory(lambda e: backend, "acc")
        with pytest.raises(ConfigurationError) as exc_info:
            factory.create_client("archive")
        assert exc_info.value.failures == ["R2:archive is missing"]

    def test_invalid_named_settings(self, backend):
        """Test settings are validated under their name."""
        factory = R2ClientFactory(lambda e: backend, "acc", named_settings={"x": R2Settings()})
        with pytest.raises(ConfigurationError) as exc_info:
            factory.create_client("x")
        assert "R2:x:AccessKeyId is required" in exc_info.value.failures

    def test_account_id_required(self, backend):
        """Test an empty account id is rejected before building a backend."""
        built = []
        factory = R2ClientFactory(
            lambda e: built.append(e) or backend,
            " ",
            settings=R2Settings(access_key_id="k", secret_access_key="s"),
        )
        with pytest.raises(ConfigurationError):
            factory.create_client()
        assert built == []
