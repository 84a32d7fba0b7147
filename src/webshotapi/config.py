"""
Client configuration.

Settings can be given explicitly or read from WEBSHOTAPI_* environment
variables.
"""

from __future__ import annotations

import os
from contextlib import suppress
from dataclasses import dataclass, fields, replace
from typing import Any

DEFAULT_BASE_URL = "https://api.webshotapi.com/"
DEFAULT_VERSION = "v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_MAX_CONCURRENCY = 2


@dataclass
class ClientConfig:
    """Configuration for WebshotClient.

    Attributes:
        api_key: Explicit API key (env/keyring are tried when unset)
        base_url: Server URL
        version: API version path segment
        timeout: Request timeout in seconds
        connect_timeout: Connection timeout in seconds
        max_concurrency: Maximum in-flight requests in batch mode
        proxy: Proxy URL
        trust_env: Let httpx read proxy settings from the environment
        request_timeout: Per-request deadline for batch dispatches (None = none)
    """

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    proxy: str | None = None
    trust_env: bool = False
    request_timeout: float | None = None

    @property
    def api_url(self) -> str:
        """Base URL including the version segment, always ending in '/'."""
        return f"{self.base_url.rstrip('/')}/{self.version.strip('/')}/"

    def validate(self) -> ClientConfig:
        """Check value ranges.

        Returns:
            Self for chaining

        Raises:
            ValueError: If a numeric setting is out of range
        """
        if self.max_concurrency <= 0:
            raise ValueError(f"max_concurrency must be positive, got {self.max_concurrency}")
        if self.timeout <= 0 or self.connect_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive when set")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        return self

    def merge(self, **overrides: Any) -> ClientConfig:
        """Return a copy with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Create configuration from environment variables.

        Invalid numeric values are ignored and the default is kept.
        """
        config = cls(
            api_key=os.getenv("WEBSHOTAPI_API_KEY") or None,
            base_url=os.getenv("WEBSHOTAPI_BASE_URL") or DEFAULT_BASE_URL,
            version=os.getenv("WEBSHOTAPI_VERSION") or DEFAULT_VERSION,
            proxy=os.getenv("WEBSHOTAPI_PROXY") or None,
            trust_env=os.getenv("WEBSHOTAPI_TRUST_ENV", "0") == "1",
        )

        if value := os.getenv("WEBSHOTAPI_TIMEOUT"):
            with suppress(ValueError):
                config.timeout = float(value)
        if value := os.getenv("WEBSHOTAPI_CONNECT_TIMEOUT"):
            with suppress(ValueError):
                config.connect_timeout = float(value)
        if value := os.getenv("WEBSHOTAPI_MAX_CONCURRENCY"):
            with suppress(ValueError):
                config.max_concurrency = int(value)
        if value := os.getenv("WEBSHOTAPI_REQUEST_TIMEOUT"):
            with suppress(ValueError):
                config.request_timeout = float(value)

        return config
