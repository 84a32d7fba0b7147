"""
Response types for client operations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from webshotapi.errors import ContentTypeError, RemoteError, extract_error_message

if TYPE_CHECKING:
    import os

    import httpx

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_PDF = "application/pdf"
CONTENT_TYPE_JPEG = "image/jpeg"
CONTENT_TYPE_PNG = "image/png"
CONTENT_TYPE_TEXT = "text/plain"

BINARY_CONTENT_TYPES = frozenset({CONTENT_TYPE_PDF, CONTENT_TYPE_JPEG, CONTENT_TYPE_PNG})

_EXTENSIONS: dict[str, str] = {
    CONTENT_TYPE_JSON: "json",
    CONTENT_TYPE_PDF: "pdf",
    CONTENT_TYPE_PNG: "png",
    CONTENT_TYPE_JPEG: "jpg",
    CONTENT_TYPE_TEXT: "txt",
}


def detect_content_type(header: str | None) -> str | None:
    """Normalize a Content-Type header to one of the supported types.

    Args:
        header: Raw Content-Type header value

    Returns:
        The canonical content type, or None if unsupported
    """
    if not header:
        return None
    value = header.lower()
    if "json" in value:
        return CONTENT_TYPE_JSON
    for content_type in (CONTENT_TYPE_PDF, CONTENT_TYPE_JPEG, CONTENT_TYPE_PNG, CONTENT_TYPE_TEXT):
        if content_type in value:
            return content_type
    return None


@dataclass
class Result:
    """Response from a WebshotAPI request.

    Attributes:
        http_code: HTTP status code
        content_type: Canonical content type of the body
        url: Website URL the request was about, if any
        response_headers: Response headers
        body: Parsed JSON, raw bytes (PDF/JPEG/PNG) or text
    """

    http_code: int = 0
    content_type: str = ""
    url: str | None = None
    response_headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    @classmethod
    def from_response(cls, response: httpx.Response, url: str | None = None) -> Result:
        """Interpret an HTTP response.

        Args:
            response: Successful (2xx) HTTP response
            url: Website URL the request was about

        Returns:
            Result with a typed body

        Raises:
            ContentTypeError: If the content type is missing or unsupported
            RemoteError: If a JSON body reports errors
        """
        result = cls(
            http_code=response.status_code,
            url=url,
            response_headers=dict(response.headers),
        )

        if response.status_code == 204:
            return result

        header = response.headers.get("content-type")
        content_type = detect_content_type(header)
        if content_type is None:
            raise ContentTypeError(
                "Unknown response content type" if header else "Missing response content type",
                content_type=header,
            )
        result.content_type = content_type

        if content_type == CONTENT_TYPE_JSON:
            try:
                result.body = response.json()
            except ValueError as e:
                raise ContentTypeError(
                    "Response body is not valid JSON", content_type=header
                ) from e
            if isinstance(result.body, dict) and result.body.get("errors"):
                raise RemoteError.from_response(
                    status_code=response.status_code,
                    body=result.body,
                    headers=result.response_headers,
                )
        elif content_type == CONTENT_TYPE_TEXT:
            result.body = response.text
        else:
            result.body = response.content

        return result

    @property
    def is_json(self) -> bool:
        """Whether the body is parsed JSON."""
        return self.content_type == CONTENT_TYPE_JSON

    @property
    def is_binary(self) -> bool:
        """Whether the body is a PDF or image."""
        return self.content_type in BINARY_CONTENT_TYPES

    @property
    def extension(self) -> str | None:
        """File extension matching the content type, without the dot."""
        return _EXTENSIONS.get(self.content_type)

    def json(self) -> Any:
        """Get the parsed JSON body.

        Raises:
            ContentTypeError: If the response is not JSON
        """
        if not self.is_json:
            raise ContentTypeError("This is not json object", content_type=self.content_type)
        return self.body

    @property
    def error_message(self) -> str | None:
        """Error text carried by a JSON body, if any."""
        if self.is_json:
            return extract_error_message(self.body)
        return None

    def save(self, file_path: str | os.PathLike[str]) -> Path:
        """Write the body to a file.

        When the path has no extension, one is added based on the
        content type.

        Args:
            file_path: Destination, e.g. /tmp/page.pdf or /tmp/page

        Returns:
            The path actually written
        """
        path = Path(file_path)
        if not path.suffix and self.extension:
            path = path.with_name(f"{path.name}.{self.extension}")

        if self.is_json:
            path.write_text(json.dumps(self.body), encoding="utf-8")
        elif isinstance(self.body, bytes):
            path.write_bytes(self.body)
        else:
            path.write_text("" if self.body is None else str(self.body), encoding="utf-8")

        return path
