"""Root pytest fixtures for webshotapi tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from webshotapi.telemetry import clear_log_context

TEST_API_URL = "https://api.webshotapi.test/v1/"


@pytest.fixture(autouse=True)
def isolated_env() -> Iterator[None]:
    """Run each test without WEBSHOTAPI_* variables from the developer's shell."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("WEBSHOTAPI_")}
    with (
        patch.dict(os.environ, env, clear=True),
        patch("webshotapi.transport.auth.HAS_KEYRING", False),
    ):
        yield
    clear_log_context()


@pytest.fixture
def api_url() -> str:
    """Versioned base URL used by the HTTP mocks."""
    return TEST_API_URL


@pytest.fixture
def base_url() -> str:
    """Server URL passed to the client (without the version segment)."""
    return TEST_API_URL.removesuffix("v1/")
