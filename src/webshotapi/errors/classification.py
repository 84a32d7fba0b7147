"""Error classification for WebshotAPI responses.

Maps HTTP status codes and error bodies onto a small set of standard
error classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorClass(str, Enum):
    """Standard error classification."""

    INVALID_REQUEST = "invalid_request"
    """Malformed request body or invalid parameters."""

    AUTHENTICATION = "authentication"
    """Missing or invalid API key."""

    PERMISSION_DENIED = "permission_denied"
    """Key is valid but not permitted to access the resource."""

    NOT_FOUND = "not_found"
    """Requested project, URL or endpoint not found."""

    QUOTA_EXHAUSTED = "quota_exhausted"
    """Subscription request quota used up."""

    RATE_LIMITED = "rate_limited"
    """Throttled by the server; retryable with backoff."""

    TIMEOUT = "timeout"
    """Request timed out on the server or gateway."""

    SERVER_ERROR = "server_error"
    """Server-side failure (5xx)."""

    OVERLOADED = "overloaded"
    """Service temporarily unavailable."""

    OTHER = "other"
    """Unknown classification."""


_RETRYABLE_CLASSES: set[ErrorClass] = {
    ErrorClass.RATE_LIMITED,
    ErrorClass.TIMEOUT,
    ErrorClass.SERVER_ERROR,
    ErrorClass.OVERLOADED,
}

_DEFAULT_STATUS_MAPPING: dict[int, ErrorClass] = {
    400: ErrorClass.INVALID_REQUEST,
    401: ErrorClass.AUTHENTICATION,
    402: ErrorClass.QUOTA_EXHAUSTED,
    403: ErrorClass.PERMISSION_DENIED,
    404: ErrorClass.NOT_FOUND,
    408: ErrorClass.TIMEOUT,
    422: ErrorClass.INVALID_REQUEST,
    429: ErrorClass.RATE_LIMITED,
    500: ErrorClass.SERVER_ERROR,
    502: ErrorClass.SERVER_ERROR,
    503: ErrorClass.OVERLOADED,
    504: ErrorClass.TIMEOUT,
}

# Fixed messages the service documents for these statuses
_STATUS_MESSAGES: dict[int, str] = {
    401: "Unauthorized client. Check your authorization token",
    403: "Access denied",
    404: "404 ERROR. Can't find item",
}


def classify_http_error(status_code: int, body: Any = None) -> ErrorClass:
    """Classify an HTTP error into a standard error class.

    Args:
        status_code: HTTP status code
        body: Response body (parsed JSON or text)

    Returns:
        ErrorClass representing the error type
    """
    if status_code == 429 and body:
        message = (extract_error_message(body) or "").lower()
        if "quota" in message or "subscription" in message:
            return ErrorClass.QUOTA_EXHAUSTED

    if status_code in _DEFAULT_STATUS_MAPPING:
        return _DEFAULT_STATUS_MAPPING[status_code]

    if 400 <= status_code < 500:
        return ErrorClass.INVALID_REQUEST
    if 500 <= status_code < 600:
        return ErrorClass.SERVER_ERROR

    return ErrorClass.OTHER


def is_retryable(error_class: ErrorClass) -> bool:
    """Check if an error class is retryable by default."""
    return error_class in _RETRYABLE_CLASSES


def status_message(status_code: int) -> str | None:
    """Get the fixed message for a status code, if the service defines one."""
    return _STATUS_MESSAGES.get(status_code)


def extract_error_message(body: Any) -> str | None:
    """Extract error message from a response body.

    Supports:
    - WebshotAPI style: {"errors": ...} (string, list or mapping)
    - Simple: {"message": "..."} or {"error": "..."}
    - Plain text bodies

    Args:
        body: Response body

    Returns:
        Error message if found, None otherwise
    """
    if not body:
        return None

    if isinstance(body, str):
        return body.strip() or None

    if not isinstance(body, dict):
        return str(body)

    if "errors" in body:
        return _stringify_errors(body["errors"])

    for key in ("message", "error", "detail"):
        value = body.get(key)
        if isinstance(value, str):
            return value
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]

    return None


def _stringify_errors(errors: Any) -> str | None:
    if not errors:
        return None
    if isinstance(errors, str):
        return errors
    if isinstance(errors, list):
        return "; ".join(_stringify_errors(e) or "" for e in errors)
    if isinstance(errors, dict):
        return "; ".join(f"{key}: {_stringify_errors(value)}" for key, value in errors.items())
    return str(errors)
