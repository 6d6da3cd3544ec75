"""Request and cached response models."""

from datetime import datetime, timezone
from enum import Enum

import httpx
from pydantic import BaseModel, Field, field_validator

# Headers describing the wire encoding; cached content is stored decoded
_HOP_HEADERS = {"content-encoding", "content-length", "transfer-encoding", "connection"}

FROM_CACHE_HEADER = "x-from-cache"


class RequestMode(str, Enum):
    """Fetch request mode. Only NAVIGATE changes routing."""

    NAVIGATE = "navigate"
    CORS = "cors"
    NO_CORS = "no-cors"
    SAME_ORIGIN = "same-origin"


class Request(BaseModel):
    """Outgoing request from a controlled page."""

    method: str = "GET"
    url: str
    mode: RequestMode = RequestMode.CORS
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes | None = None

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @property
    def is_navigation(self) -> bool:
        return self.mode == RequestMode.NAVIGATE

    @property
    def identity(self) -> tuple[str, str]:
        """Cache key: (method, url without fragment)."""
        return self.method, self.url.split("#", 1)[0]

    def with_url(self, url: str) -> "Request":
        return self.model_copy(update={"url": url})


class CachedResponse(BaseModel):
    """Snapshot of an ok response as held in a cache bucket."""

    url: str
    status_code: int
    headers: list[tuple[str, str]] = Field(default_factory=list)
    content: bytes = b""
    stored_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_response(cls, response: httpx.Response, url: str) -> "CachedResponse":
        headers = [(k, v) for k, v in response.headers.items() if k.lower() not in _HOP_HEADERS]
        return cls(
            url=url,
            status_code=response.status_code,
            headers=headers,
            content=response.content,
        )

    def to_response(self) -> httpx.Response:
        """Rebuild a response, marked as served from cache."""
        return httpx.Response(
            self.status_code,
            headers=[*self.headers, (FROM_CACHE_HEADER, "true")],
            content=self.content,
            request=httpx.Request("GET", self.url),
        )


def is_from_cache(response: httpx.Response) -> bool:
    """True when the response was rebuilt from a cache entry."""
    return response.headers.get(FROM_CACHE_HEADER) == "true"
