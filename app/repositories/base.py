"""Cache storage interfaces - named buckets of request/response pairs."""

from typing import Protocol

from app.models import CachedResponse, Request


def cache_key(request: Request | str) -> tuple[str, str]:
    """(method, url) identity; plain strings are GET URLs."""
    if isinstance(request, str):
        return "GET", request.split("#", 1)[0]
    return request.identity


class Cache(Protocol):
    """One named bucket."""

    name: str

    async def match(self, request: Request | str) -> CachedResponse | None: ...

    async def put(self, request: Request | str, response: CachedResponse) -> None: ...

    async def delete(self, request: Request | str) -> bool: ...

    async def keys(self) -> list[tuple[str, str]]: ...


class CacheStorage(Protocol):
    """All buckets for one origin."""

    async def open(self, name: str) -> Cache: ...

    async def has(self, name: str) -> bool: ...

    async def delete(self, name: str) -> bool: ...

    async def keys(self) -> list[str]: ...

    async def match(self, request: Request | str) -> CachedResponse | None: ...
