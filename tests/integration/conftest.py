"""
Integration test helper utilities.

Shared fixtures and utilities for integration tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest_asyncio

from webshotapi import WebshotClient

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import pytest_httpx


def mock_screenshot_response(
    httpx_mock: pytest_httpx.HTTPXMock,
    api_url: str,
    fmt: str = "pdf",
    content: bytes = b"%PDF-1.7",
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> None:
    """Register a binary screenshot response for /screenshot/{fmt}."""
    content_type = {"pdf": "application/pdf", "jpg": "image/jpeg", "png": "image/png"}[fmt]
    httpx_mock.add_response(
        url=f"{api_url}screenshot/{fmt}",
        method="POST",
        content=content,
        headers={"Content-Type": content_type, **(headers or {})},
        **kwargs,
    )


def mock_extract_response(
    httpx_mock: pytest_httpx.HTTPXMock,
    api_url: str,
    words: list[str] | None = None,
    **kwargs: Any,
) -> None:
    """Register a JSON response for /extract."""
    httpx_mock.add_response(
        url=f"{api_url}extract",
        method="POST",
        json={
            "words": [
                {"word": w, "x": 10 * i, "y": 20, "width": 40, "height": 16}
                for i, w in enumerate(words or ["Example", "Domain"])
            ],
        },
        **kwargs,
    )


@pytest_asyncio.fixture
async def client(base_url: str) -> AsyncIterator[WebshotClient]:
    """Client pointed at the mocked API."""
    async with WebshotClient.builder().api_key("test-key").base_url(base_url).build() as c:
        yield c
