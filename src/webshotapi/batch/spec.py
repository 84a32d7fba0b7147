"""
Request specification shared by direct calls and batch mode.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    """HTTP methods used by the WebshotAPI endpoints."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestSpec(BaseModel):
    """An API call, described but not yet executed.

    Immutable: the queue stores an indexed copy rather than mutating
    the caller's instance.
    """

    model_config = ConfigDict(frozen=True)

    target: str | None = Field(default=None, description="Website URL sent as 'link'")
    path: str = Field(description="API path relative to the versioned base URL")
    method: HttpMethod = Field(default=HttpMethod.POST, description="HTTP method")
    params: dict[str, Any] = Field(default_factory=dict, description="Request parameters")
    index: int = Field(default=-1, description="Submission position, -1 until enqueued")

    @field_validator("path")
    @classmethod
    def _path_not_empty(cls, value: str) -> str:
        value = value.strip().lstrip("/")
        if not value:
            raise ValueError("path must not be empty")
        return value

    @property
    def is_enqueued(self) -> bool:
        """Whether a queue has assigned this spec an index."""
        return self.index >= 0

    def payload(self) -> dict[str, Any]:
        """Parameters to send, with ``link`` set from ``target`` when given.

        Returns a new dict; ``params`` itself is never modified.
        """
        payload = dict(self.params)
        if self.target:
            payload["link"] = self.target
        return payload

    def with_index(self, index: int) -> RequestSpec:
        """Return a copy carrying the given submission index."""
        return self.model_copy(update={"index": index})
