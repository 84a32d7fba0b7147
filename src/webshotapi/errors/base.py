"""Base error classes for webshotapi.

Provides a layered error hierarchy:
- WebshotError: Base class for all library errors
- TransportError: HTTP/network errors
- RemoteError: Errors reported by the WebshotAPI service
- ContentTypeError: Response content that cannot be interpreted
- ValidationError: Invalid request construction
- UsageError: Library misuse (batch state, gate accounting)
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Any

from webshotapi.errors.classification import ErrorClass


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    field_path: str | None = None
    """Path to the problematic field (e.g., 'params.link')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'transport', 'remote', 'batch')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class WebshotError(Exception):
    """Base class for all webshotapi errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> WebshotError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class TransportError(WebshotError):
    """Error during HTTP transport.

    Raised when:
    - Network connection failure
    - Timeout (connect, read, or batch request timeout)
    - Protocol or proxy errors
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transport")
        if url:
            ctx.details["url"] = url
        if status_code:
            ctx.details["status_code"] = status_code
        super().__init__(message, ctx)
        self.url = url
        self.status_code = status_code
        self.__cause__ = cause


class ValidationError(WebshotError):
    """Invalid request construction.

    Raised when:
    - No API key could be resolved
    - Request path or method is missing
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        field: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="validation")
        if field:
            ctx.field_path = field
        super().__init__(message, ctx)
        self.field = field


class ContentTypeError(WebshotError):
    """Response content type is missing, unknown, or not what was asked for."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        content_type: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="response")
        if content_type:
            ctx.details["content_type"] = content_type
        super().__init__(message, ctx)
        self.content_type = content_type


class UsageError(WebshotError):
    """The library was driven in a way that breaks its invariants.

    Examples: releasing a gate slot that was never acquired, or running
    a batch when batch mode is not armed.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, context or ErrorContext(source="usage"))


class RemoteError(WebshotError):
    """Error reported by the WebshotAPI service.

    Attributes:
        status_code: HTTP status code
        error_class: Standardized error classification
        retryable: Whether the error is retryable
        raw_error: Raw error body from the API
        retry_after: Suggested retry delay in seconds (from header)
        request_id: Server request ID, when present
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_class: ErrorClass,
        retryable: bool = False,
        raw_error: Any = None,
        retry_after: float | None = None,
        request_id: str | None = None,
    ) -> None:
        ctx = ErrorContext(source="remote")
        ctx.details["status_code"] = status_code
        ctx.details["error_class"] = error_class.value
        ctx.details["retryable"] = retryable
        if request_id:
            ctx.details["request_id"] = request_id

        super().__init__(message, ctx)

        self.status_code = status_code
        self.error_class = error_class
        self.retryable = retryable
        self.raw_error = raw_error
        self.retry_after = retry_after
        self.request_id = request_id

    @classmethod
    def from_response(
        cls,
        status_code: int,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RemoteError:
        """Create RemoteError from an HTTP response.

        Args:
            status_code: HTTP status code
            body: Response body (parsed JSON or text)
            headers: Response headers

        Returns:
            RemoteError with appropriate classification
        """
        from webshotapi.errors.classification import (
            classify_http_error,
            extract_error_message,
            is_retryable,
            status_message,
        )

        error_class = classify_http_error(status_code, body)
        message = (
            status_message(status_code)
            or extract_error_message(body)
            or f"HTTP {status_code}"
        )

        headers = {k.lower(): v for k, v in (headers or {}).items()}

        retry_after = None
        if retry_after_str := headers.get("retry-after"):
            with contextlib.suppress(ValueError):
                retry_after = float(retry_after_str)

        request_id = headers.get("x-request-id") or headers.get("request-id")
        if isinstance(body, dict) and "request_id" in body:
            request_id = str(body["request_id"])

        return cls(
            message=message,
            status_code=status_code,
            error_class=error_class,
            retryable=is_retryable(error_class),
            raw_error=body,
            retry_after=retry_after,
            request_id=request_id,
        )
