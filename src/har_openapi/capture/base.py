"""Unified data models for captured HTTP traffic.

The HAR reader converts every archive entry into these models; schema
inference and document assembly only ever see a ``Sample``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

Header = tuple[str, str]
Query = tuple[str, str]


class RequestBody(BaseModel):
    """Posted data: the declared mime type and its parsed content."""

    model_config = ConfigDict(frozen=True)

    mime: str
    content: Any = None  # parsed JSON, raw text when not JSON, None when empty


class Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    method: str  # GET / POST / PUT / DELETE / PATCH
    headers: list[Header] = []
    query: list[Query] = []  # percent-decoded names, in capture order
    body: RequestBody | None = None


class Response(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: Any = None  # parsed JSON, raw text when not JSON, None when empty
    headers: list[Header] = []


class Sample(BaseModel):
    """One observed request/response pair."""

    model_config = ConfigDict(frozen=True)

    request: Request
    response: Response

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def method(self) -> str:
        return self.request.method
