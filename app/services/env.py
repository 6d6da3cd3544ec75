"""Environment bundle handed to every lifecycle handler."""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from app.models import CachedResponse, Request, WorkerConfig
from app.repositories import CacheStorage
from app.services.clients import ClientRegistry
from sw_client import Fetch


@dataclass
class WorkerEnv:
    """Cache store, network and client registry for one worker."""

    config: WorkerConfig
    caches: CacheStorage
    fetch: Fetch
    clients: ClientRegistry
    skip_waiting_requested: bool = False
    _tasks: set[asyncio.Task] = field(default_factory=set, repr=False)

    def skip_waiting(self) -> None:
        """Ask to activate without waiting for open pages to close."""
        self.skip_waiting_requested = True

    def wait_until(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run work past the response; the task is held until it settles."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all background work to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def safe_match(env: WorkerEnv, request: Request | str) -> CachedResponse | None:
    """Cache lookup across buckets; read failures count as a miss."""
    try:
        return await env.caches.match(request)
    except Exception as e:
        logger.warning("Cache read failed for {}: {}", request, e)
        return None


async def safe_put(env: WorkerEnv, request: Request | str, response: httpx.Response) -> bool:
    """Store an ok response in the current bucket; anything else is skipped."""
    url = request if isinstance(request, str) else request.url
    if not response.is_success:
        logger.debug("Not caching {} (HTTP {})", url, response.status_code)
        return False
    try:
        cache = await env.caches.open(env.config.cache_name)
        await cache.put(request, CachedResponse.from_response(response, url))
    except Exception as e:
        logger.warning("Cache write failed for {}: {}", url, e)
        return False
    return True
