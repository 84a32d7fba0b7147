"""Tests for client configuration."""

import os
from unittest.mock import patch

import pytest

from webshotapi._features import HAS_HTTP2, HAS_KEYRING, require_extra
from webshotapi.client import WebshotClientBuilder
from webshotapi.config import DEFAULT_MAX_CONCURRENCY, ClientConfig


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = ClientConfig()
        assert config.api_key is None
        assert config.max_concurrency == DEFAULT_MAX_CONCURRENCY == 2
        assert config.api_url == "https://api.webshotapi.com/v1/"

    def test_api_url_normalization(self) -> None:
        """Test slashes are normalized around the version."""
        config = ClientConfig(base_url="http://localhost:8080", version="/v2/")
        assert config.api_url == "http://localhost:8080/v2/"

    def test_merge_ignores_none(self) -> None:
        """Test merge only applies non-None known fields."""
        config = ClientConfig(api_key="a").merge(api_key=None, max_concurrency=5, bogus=1)
        assert config.api_key == "a"
        assert config.max_concurrency == 5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_concurrency": 0},
            {"timeout": 0},
            {"request_timeout": -1.0},
            {"base_url": ""},
        ],
    )
    def test_validate_rejects(self, kwargs: dict) -> None:
        """Test out-of-range values are rejected."""
        with pytest.raises(ValueError):
            ClientConfig(**kwargs).validate()

    def test_from_env(self) -> None:
        """Test environment variables are read."""
        env = {
            "WEBSHOTAPI_API_KEY": "env-key",
            "WEBSHOTAPI_BASE_URL": "http://localhost:9000/",
            "WEBSHOTAPI_MAX_CONCURRENCY": "8",
            "WEBSHOTAPI_TIMEOUT": "12.5",
            "WEBSHOTAPI_REQUEST_TIMEOUT": "60",
            "WEBSHOTAPI_TRUST_ENV": "1",
        }
        with patch.dict(os.environ, env):
            config = ClientConfig.from_env()
        assert config.api_key == "env-key"
        assert config.api_url == "http://localhost:9000/v1/"
        assert config.max_concurrency == 8
        assert config.timeout == 12.5
        assert config.request_timeout == 60.0
        assert config.trust_env is True

    def test_from_env_invalid_numbers(self) -> None:
        """Test invalid numbers keep defaults."""
        with patch.dict(os.environ, {"WEBSHOTAPI_MAX_CONCURRENCY": "many"}):
            config = ClientConfig.from_env()
        assert config.max_concurrency == DEFAULT_MAX_CONCURRENCY


class TestWebshotClientBuilder:
    """Tests for WebshotClientBuilder."""

    def test_build(self) -> None:
        """Test builder settings reach the client."""
        client = (
            WebshotClientBuilder()
            .api_key("key")
            .base_url("http://localhost:1234")
            .version("v2")
            .max_concurrency(6)
            .timeout(5)
            .connect_timeout(2)
            .request_timeout(30)
            .build()
        )
        assert client.max_concurrency == 6
        assert client.config.api_url == "http://localhost:1234/v2/"
        assert client.config.request_timeout == 30
        assert client.config.connect_timeout == 2

    def test_build_validates(self) -> None:
        """Test invalid settings fail at build time."""
        with pytest.raises(ValueError):
            WebshotClientBuilder().max_concurrency(0).build()

    def test_from_env(self) -> None:
        """Test builder seeded from the environment."""
        with patch.dict(os.environ, {"WEBSHOTAPI_MAX_CONCURRENCY": "3"}):
            builder = WebshotClientBuilder().from_env().proxy("http://proxy:3128")
        assert builder.config.max_concurrency == 3
        assert builder.config.proxy == "http://proxy:3128"


class TestFeatures:
    """Tests for optional-extra detection."""

    def test_require_extra_present(self) -> None:
        """Test an installed package passes."""
        require_extra("test", "pytest")

    def test_require_extra_missing(self) -> None:
        """Test a missing package raises with an install hint."""
        with pytest.raises(ImportError, match=r"pip install webshotapi-python\[keyring\]"):
            require_extra("keyring", "webshotapi_missing_module")

    def test_flags_are_bool(self) -> None:
        """Test feature flags are plain booleans."""
        assert isinstance(HAS_KEYRING, bool)
        assert isinstance(HAS_HTTP2, bool)
