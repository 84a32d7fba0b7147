"""
Telemetry module for webshotapi.

Provides structured logging with request-scoped context and
sensitive data masking.
"""

from webshotapi.telemetry.logger import (
    JsonFormatter,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    TextFormatter,
    WebshotLogger,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "SensitiveDataMasker",
    "TextFormatter",
    "WebshotLogger",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
