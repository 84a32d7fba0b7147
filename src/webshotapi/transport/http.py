"""HTTP transport using httpx for async requests.

Provides:
- Configurable timeouts
- Proxy support
- Automatic header management
- Quota tracking from response headers
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any

import httpx

from webshotapi._features import HAS_HTTP2
from webshotapi.errors import RemoteError, TransportError, ValidationError
from webshotapi.telemetry import get_logger
from webshotapi.transport.auth import get_auth_header

if TYPE_CHECKING:
    from webshotapi.config import ClientConfig

logger = get_logger(__name__)

QUOTA_HEADER = "X-Quota-Remaining"

_UA_VERSION: str | None = None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        from importlib.metadata import PackageNotFoundError, version

        try:
            _UA_VERSION = version("webshotapi-python")
        except PackageNotFoundError:
            _UA_VERSION = "1.0.0"
    return _UA_VERSION


class HttpTransport:
    """HTTP transport for WebshotAPI communication.

    Example:
        >>> transport = HttpTransport(ClientConfig(api_key="..."))
        >>> response = await transport.request("POST", "screenshot/pdf", params={"link": url})
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize HTTP transport.

        Args:
            config: Client configuration
        """
        self._config = config
        self._auth_headers = get_auth_header(config.api_key)
        self._request_remaining: int | None = None

        # Client instance (lazy initialization)
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        """Versioned API base URL."""
        return self._config.api_url

    @property
    def request_remaining(self) -> int | None:
        """Requests left in the subscription, from the last response seen."""
        return self._request_remaining

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            timeout = httpx.Timeout(
                self._config.timeout,
                connect=self._config.connect_timeout,
            )
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout,
                proxy=self._config.proxy,
                http2=HAS_HTTP2,
                trust_env=self._config.trust_env,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        """Build request headers.

        Raises:
            ValidationError: If no API key is available
        """
        if not self._auth_headers:
            raise ValidationError(
                "Please set your api key first", field="api_key"
            ).with_hint("pass api_key or set WEBSHOTAPI_API_KEY")

        headers = {
            "Content-Type": "application/json",
            "Accept": "*/*",
            "User-Agent": f"webshotapi-python/{_get_ua_version()}",
        }
        headers.update(self._auth_headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _track_quota(self, response: httpx.Response) -> None:
        value = response.headers.get(QUOTA_HEADER)
        if value is not None:
            with contextlib.suppress(ValueError):
                self._request_remaining = int(value)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make an HTTP request.

        Non-GET requests carry ``params`` as a JSON body; GET requests send
        them as the query string.

        Args:
            method: HTTP method
            path: Request path (relative to the versioned base URL)
            params: Request parameters
            headers: Additional headers

        Returns:
            HTTP response

        Raises:
            ValidationError: If the request cannot be built
            TransportError: On network/connection errors
            RemoteError: On API errors (4xx, 5xx)
        """
        if not method:
            raise ValidationError("You have to set method for api", field="method")

        request_headers = self._build_headers(headers)
        client = self._get_client()
        url = f"{self.base_url}{path}"

        kwargs: dict[str, Any] = {}
        if method.upper() == "GET":
            if params:
                kwargs["params"] = params
        else:
            kwargs["json"] = params or {}

        logger.debug("Sending request", method=method, path=path)

        try:
            response = await client.request(
                method=method.upper(),
                url=path.lstrip("/"),
                headers=request_headers,
                **kwargs,
            )
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e

        self._track_quota(response)

        if response.status_code >= 400:
            body: Any = None
            with contextlib.suppress(ValueError):
                body = response.json()
            if body is None:
                body = response.text

            logger.debug(
                "Request rejected by server",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise RemoteError.from_response(
                status_code=response.status_code,
                body=body,
                headers=dict(response.headers),
            )

        return response

    async def __aenter__(self) -> HttpTransport:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
