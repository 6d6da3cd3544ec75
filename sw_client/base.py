"""Network fetch capability - async HTTP client bound to the origin."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Literal

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.models import Request
from settings import API_TIMEOUT, MAX_CONCURRENT

CacheMode = Literal["default", "no-store"]
Fetch = Callable[..., Awaitable[httpx.Response]]

NO_STORE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}
RETRYABLE_ERRORS = (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)


class HttpFetcher:
    """Async HTTP client with a concurrency cap.

    Calling the fetcher sends one request and returns the response whatever
    its status; only transport problems raise (httpx.TransportError).
    """

    def __init__(
        self,
        origin: str,
        timeout: float = API_TIMEOUT,
        max_concurrent: int = MAX_CONCURRENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._origin = origin
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.info("{}: origin={}, max_concurrent={}", self.__class__.__name__, origin, max_concurrent)

    @property
    def request_count(self) -> int:
        return self._request_count

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self._origin,
            timeout=self._timeout,
            follow_redirects=True,
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        logger.info("Total network requests: {}", self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __call__(self, request: Request, cache_mode: CacheMode = "default") -> httpx.Response:
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} used outside 'async with'")

        headers = dict(request.headers)
        if cache_mode == "no-store":
            headers.update(NO_STORE_HEADERS)

        async with self._sem:
            self._request_count += 1
            resp = await self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.content,
            )
        logger.debug("{} {} -> {}", request.method, request.url, resp.status_code)
        return resp


async def fetch_with_retry(
    fetch: Fetch,
    request: Request,
    attempts: int = 1,
    cache_mode: CacheMode = "no-store",
) -> httpx.Response:
    """Fetch, retrying transient network errors with exponential backoff."""
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        reraise=True,
    ):
        with attempt:
            return await fetch(request, cache_mode=cache_mode)
