"""
Client layer - User-facing API.

This module provides:
- WebshotClient: Main entry point for the WebshotAPI service
- WebshotClientBuilder: Fluent client configuration
- BatchSession: Queued ("multi") execution
- Result: Typed response with JSON access and file saving
"""

from webshotapi.client.builder import WebshotClientBuilder
from webshotapi.client.core import WebshotClient
from webshotapi.client.endpoints import EndpointsMixin
from webshotapi.client.response import Result, detect_content_type
from webshotapi.client.session import BatchSession

__all__ = [
    "BatchSession",
    "EndpointsMixin",
    "Result",
    "WebshotClient",
    "WebshotClientBuilder",
    "detect_content_type",
]
