"""
Error hierarchy for webshotapi.

Provides structured error types for transport, remote API, response and
batch-usage failures.
"""

from webshotapi.errors.base import (
    ContentTypeError,
    ErrorContext,
    RemoteError,
    TransportError,
    UsageError,
    ValidationError,
    WebshotError,
)
from webshotapi.errors.classification import (
    ErrorClass,
    classify_http_error,
    extract_error_message,
    is_retryable,
)

__all__ = [
    "ContentTypeError",
    "ErrorClass",
    "ErrorContext",
    "RemoteError",
    "TransportError",
    "UsageError",
    "ValidationError",
    "WebshotError",
    "classify_http_error",
    "extract_error_message",
    "is_retryable",
]
