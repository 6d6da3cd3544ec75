"""In-memory cache storage."""

from loguru import logger

from app.models import CachedResponse, Request
from app.repositories.base import cache_key


class MemoryCache:
    """Dict-backed bucket."""

    def __init__(self, name: str):
        self.name = name
        self._entries: dict[tuple[str, str], CachedResponse] = {}

    async def match(self, request: Request | str) -> CachedResponse | None:
        return self._entries.get(cache_key(request))

    async def put(self, request: Request | str, response: CachedResponse) -> None:
        self._entries[cache_key(request)] = response

    async def delete(self, request: Request | str) -> bool:
        return self._entries.pop(cache_key(request), None) is not None

    async def keys(self) -> list[tuple[str, str]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class MemoryCacheStorage:
    """Buckets kept in process memory, in creation order."""

    def __init__(self):
        self._buckets: dict[str, MemoryCache] = {}

    async def open(self, name: str) -> MemoryCache:
        if name not in self._buckets:
            self._buckets[name] = MemoryCache(name)
            logger.debug("Cache bucket created: {}", name)
        return self._buckets[name]

    async def has(self, name: str) -> bool:
        return name in self._buckets

    async def delete(self, name: str) -> bool:
        return self._buckets.pop(name, None) is not None

    async def keys(self) -> list[str]:
        return list(self._buckets)

    async def match(self, request: Request | str) -> CachedResponse | None:
        """First match across buckets, oldest bucket first."""
        for bucket in self._buckets.values():
            found = await bucket.match(request)
            if found is not None:
                return found
        return None
