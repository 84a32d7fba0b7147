"""webshotapi: Python client for the WebshotAPI screenshot and scraping service.

Takes website screenshots (PDF, JPEG, PNG), extracts page content and
manages projects, one request at a time or as a concurrency-bounded batch.
"""
from __future__ import annotations

from webshotapi._features import HAS_HTTP2, HAS_KEYRING, require_extra
from webshotapi.batch import (
    BatchEvent,
    BatchStats,
    ConcurrencyGate,
    HttpMethod,
    ProgressMonitor,
    RequestSpec,
)
from webshotapi.client import BatchSession, Result, WebshotClient, WebshotClientBuilder
from webshotapi.config import ClientConfig
from webshotapi.errors import (
    ContentTypeError,
    RemoteError,
    TransportError,
    UsageError,
    ValidationError,
    WebshotError,
)

__version__ = "1.0.0"

__all__ = [
    # Batch
    "BatchEvent",
    "BatchSession",
    "BatchStats",
    # Config
    "ClientConfig",
    "ConcurrencyGate",
    # Errors
    "ContentTypeError",
    # Feature flags
    "HAS_HTTP2",
    "HAS_KEYRING",
    "HttpMethod",
    "ProgressMonitor",
    "RemoteError",
    "RequestSpec",
    # Client
    "Result",
    "TransportError",
    "UsageError",
    "ValidationError",
    "WebshotClient",
    "WebshotClientBuilder",
    "WebshotError",
    "require_extra",
    # Version
    "__version__",
]
