"""
Transport layer - HTTP client for WebshotAPI communication.

Provides httpx-based transport with:
- Bearer authentication
- Timeout management
- API key resolution
- Quota tracking
"""

from webshotapi.transport.auth import get_auth_header, resolve_api_key, store_api_key
from webshotapi.transport.http import HttpTransport

__all__ = [
    "HttpTransport",
    "get_auth_header",
    "resolve_api_key",
    "store_api_key",
]
