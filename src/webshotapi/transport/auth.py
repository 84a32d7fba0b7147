"""
API key resolution utilities.

Resolves the WebshotAPI key from:
1. Explicit value
2. WEBSHOTAPI_API_KEY environment variable
3. System keyring (optional)
"""

from __future__ import annotations

import os

from webshotapi._features import HAS_KEYRING, require_extra

API_KEY_ENV = "WEBSHOTAPI_API_KEY"
KEYRING_SERVICE = "webshotapi"


def resolve_api_key(explicit_key: str | None = None) -> str | None:
    """Resolve the API key.

    Args:
        explicit_key: Explicitly provided API key

    Returns:
        Resolved API key or None if not found
    """
    if explicit_key:
        return explicit_key

    key = os.getenv(API_KEY_ENV)
    if key:
        return key

    return _try_keyring()


def _try_keyring() -> str | None:
    """Try to get the API key from the system keyring."""
    if not HAS_KEYRING:
        return None

    import keyring
    from keyring.errors import KeyringError

    try:
        return keyring.get_password(KEYRING_SERVICE, "api_key")
    except KeyringError:
        # No usable backend (common in containers, CI, WSL)
        return None


def store_api_key(api_key: str) -> None:
    """Save the API key to the system keyring for later resolution.

    Raises:
        ImportError: If the keyring extra is not installed
    """
    require_extra("keyring", "keyring")

    import keyring

    keyring.set_password(KEYRING_SERVICE, "api_key", api_key)


def get_auth_header(api_key: str | None = None) -> dict[str, str]:
    """Get the authentication header.

    Args:
        api_key: Optional explicit API key

    Returns:
        Dictionary with the Authorization header, empty if no key resolves
    """
    key = resolve_api_key(api_key)
    if not key:
        return {}
    return {"Authorization": f"Bearer {key}"}
