"""
Builder for fluent client construction.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from webshotapi.config import ClientConfig

if TYPE_CHECKING:
    from webshotapi.client.core import WebshotClient


class WebshotClientBuilder:
    """Builder for creating WebshotClient instances with custom configuration.

    Example:
        >>> client = (
        ...     WebshotClientBuilder()
        ...     .from_env()
        ...     .max_concurrency(4)
        ...     .request_timeout(120)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        """Initialize the builder."""
        self._config = ClientConfig()

    def from_env(self) -> WebshotClientBuilder:
        """Start from WEBSHOTAPI_* environment variables.

        Settings made before this call are replaced.

        Returns:
            Self for chaining
        """
        self._config = ClientConfig.from_env()
        return self

    def api_key(self, key: str) -> WebshotClientBuilder:
        """Set explicit API key."""
        self._config = replace(self._config, api_key=key)
        return self

    def base_url(self, url: str) -> WebshotClientBuilder:
        """Override the server URL."""
        self._config = replace(self._config, base_url=url)
        return self

    def version(self, version: str) -> WebshotClientBuilder:
        """Set the API version (e.g. "v1")."""
        self._config = replace(self._config, version=version)
        return self

    def max_concurrency(self, n: int) -> WebshotClientBuilder:
        """Set the maximum number of in-flight batch requests."""
        self._config = replace(self._config, max_concurrency=n)
        return self

    def timeout(self, seconds: float) -> WebshotClientBuilder:
        """Set request timeout."""
        self._config = replace(self._config, timeout=seconds)
        return self

    def connect_timeout(self, seconds: float) -> WebshotClientBuilder:
        """Set connection timeout."""
        self._config = replace(self._config, connect_timeout=seconds)
        return self

    def proxy(self, url: str) -> WebshotClientBuilder:
        """Route requests through a proxy."""
        self._config = replace(self._config, proxy=url)
        return self

    def request_timeout(self, seconds: float) -> WebshotClientBuilder:
        """Give each batch request a deadline.

        A request exceeding it is cancelled, frees its slot, and is
        reported as failed.
        """
        self._config = replace(self._config, request_timeout=seconds)
        return self

    @property
    def config(self) -> ClientConfig:
        """Configuration collected so far."""
        return self._config

    def build(self) -> WebshotClient:
        """Build the WebshotClient instance.

        Raises:
            ValueError: If the configuration is out of range
        """
        from webshotapi.client.core import WebshotClient

        return WebshotClient(config=self._config)
