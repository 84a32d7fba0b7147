"""Tests for transport module."""

import json
import os
import sys
from unittest.mock import MagicMock, patch

import httpx
import pytest

from webshotapi.config import ClientConfig
from webshotapi.errors import ErrorClass, RemoteError, TransportError, ValidationError
from webshotapi.transport import (
    HttpTransport,
    get_auth_header,
    resolve_api_key,
    store_api_key,
)


class TestResolveApiKey:
    """Tests for API key resolution."""

    def test_explicit_key(self) -> None:
        """Test explicit API key takes precedence."""
        with patch.dict(os.environ, {"WEBSHOTAPI_API_KEY": "env-key"}):
            assert resolve_api_key("explicit-key") == "explicit-key"

    def test_env_variable(self) -> None:
        """Test environment variable."""
        with patch.dict(os.environ, {"WEBSHOTAPI_API_KEY": "env-key"}):
            assert resolve_api_key() == "env-key"

    def test_no_key_found(self) -> None:
        """Test when no key is found."""
        assert resolve_api_key() is None

    def test_keyring_fallback(self) -> None:
        """Test keyring is consulted last."""
        with patch("webshotapi.transport.auth._try_keyring", return_value="ring-key"):
            assert resolve_api_key() == "ring-key"


class TestStoreApiKey:
    """Tests for saving the key to the keyring."""

    def test_requires_keyring_extra(self) -> None:
        """Test a missing keyring extra raises with an install hint."""
        with (
            patch("webshotapi._features._check_import", return_value=False),
            pytest.raises(ImportError, match=r"webshotapi-python\[keyring\]"),
        ):
            store_api_key("secret")

    def test_saves_under_service(self) -> None:
        """Test the key is saved under the webshotapi service."""
        keyring = MagicMock()
        with (
            patch("webshotapi._features._check_import", return_value=True),
            patch.dict(sys.modules, {"keyring": keyring}),
        ):
            store_api_key("secret")
        keyring.set_password.assert_called_once_with("webshotapi", "api_key", "secret")


class TestGetAuthHeader:
    """Tests for auth header generation."""

    def test_bearer_auth(self) -> None:
        """Test bearer authentication header."""
        assert get_auth_header("secret") == {"Authorization": "Bearer secret"}

    def test_no_key(self) -> None:
        """Test no header without a key."""
        assert get_auth_header() == {}


@pytest.fixture
def transport(base_url: str) -> HttpTransport:
    """Transport pointed at the mock server."""
    return HttpTransport(ClientConfig(api_key="test-key", base_url=base_url))


class TestHttpTransport:
    """Tests for HttpTransport."""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(
        self, httpx_mock, transport: HttpTransport, api_url: str
    ) -> None:
        """Test POST requests carry params as JSON with auth headers."""
        httpx_mock.add_response(
            url=f"{api_url}screenshot/pdf", method="POST", content=b"%PDF"
        )

        response = await transport.request(
            "POST", "screenshot/pdf", params={"link": "https://example.com", "width": 1280}
        )

        assert response.status_code == 200
        request = httpx_mock.get_request()
        assert json.loads(request.content) == {"link": "https://example.com", "width": 1280}
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("webshotapi-python/")
        await transport.close()

    @pytest.mark.asyncio
    async def test_get_sends_query(
        self, httpx_mock, transport: HttpTransport, api_url: str
    ) -> None:
        """Test GET requests carry params as the query string."""
        httpx_mock.add_response(url=f"{api_url}projects?page=2", method="GET", json=[])

        await transport.request("GET", "projects", params={"page": 2})

        request = httpx_mock.get_request()
        assert request.url.params["page"] == "2"
        assert request.content == b""
        await transport.close()

    @pytest.mark.asyncio
    async def test_quota_tracked(
        self, httpx_mock, transport: HttpTransport, api_url: str
    ) -> None:
        """Test remaining quota is read from response headers."""
        httpx_mock.add_response(
            url=f"{api_url}info", json={}, headers={"X-Quota-Remaining": "42"}
        )
        assert transport.request_remaining is None

        await transport.request("GET", "info")

        assert transport.request_remaining == 42
        await transport.close()

    @pytest.mark.asyncio
    async def test_remote_error(
        self, httpx_mock, transport: HttpTransport, api_url: str
    ) -> None:
        """Test error statuses raise RemoteError with the service message."""
        httpx_mock.add_response(
            url=f"{api_url}screenshot/png",
            status_code=401,
            json={"errors": "bad token"},
        )

        with pytest.raises(RemoteError) as exc_info:
            await transport.request("POST", "screenshot/png", params={})

        assert exc_info.value.status_code == 401
        assert exc_info.value.error_class == ErrorClass.AUTHENTICATION
        assert exc_info.value.message == "Unauthorized client. Check your authorization token"
        await transport.close()

    @pytest.mark.asyncio
    async def test_remote_error_text_body(
        self, httpx_mock, transport: HttpTransport, api_url: str
    ) -> None:
        """Test non-JSON error bodies are used as the message."""
        httpx_mock.add_response(url=f"{api_url}extract", status_code=500, text="boom")

        with pytest.raises(RemoteError) as exc_info:
            await transport.request("POST", "extract")

        assert exc_info.value.message == "boom"
        assert exc_info.value.retryable
        await transport.close()

    @pytest.mark.asyncio
    async def test_connection_error(self, httpx_mock, transport: HttpTransport) -> None:
        """Test network errors become TransportError."""
        httpx_mock.add_exception(httpx.ConnectError("refused"))

        with pytest.raises(TransportError, match="Connection failed"):
            await transport.request("GET", "info")
        await transport.close()

    @pytest.mark.asyncio
    async def test_timeout_error(self, httpx_mock, transport: HttpTransport) -> None:
        """Test timeouts become TransportError."""
        httpx_mock.add_exception(httpx.ReadTimeout("slow"))

        with pytest.raises(TransportError, match="timed out"):
            await transport.request("GET", "info")
        await transport.close()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, base_url: str) -> None:
        """Test requests without a key fail before hitting the network."""
        transport = HttpTransport(ClientConfig(base_url=base_url))
        transport._get_client = MagicMock()

        with pytest.raises(ValidationError, match="Please set your api key first"):
            await transport.request("GET", "info")
        transport._get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_method(self, transport: HttpTransport) -> None:
        """Test an empty method is rejected."""
        with pytest.raises(ValidationError, match="You have to set method for api"):
            await transport.request("", "info")
