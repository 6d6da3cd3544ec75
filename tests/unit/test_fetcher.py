"""Tests for the HTTP fetcher."""

import httpx
import pytest

from app.models import Request
from sw_client import HttpFetcher, fetch_with_retry

ORIGIN = "http://app.test"


def transport(seen: list):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/missing":
            return httpx.Response(404, text="not found")
        if request.url.path == "/down":
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200, text="ok")

    return httpx.MockTransport(handler)


class TestHttpFetcher:
    @pytest.mark.asyncio
    async def test_no_store_headers(self):
        seen = []
        async with HttpFetcher(ORIGIN, transport=transport(seen)) as fetch:
            await fetch(Request(url="/index.html"), cache_mode="no-store")

        assert seen[0].headers["cache-control"] == "no-store"
        assert seen[0].headers["pragma"] == "no-cache"

    @pytest.mark.asyncio
    async def test_relative_url_uses_origin(self):
        seen = []
        async with HttpFetcher(ORIGIN, transport=transport(seen)) as fetch:
            await fetch(Request(url="/home"))

        assert str(seen[0].url) == "http://app.test/home"
        assert "cache-control" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_error_status_is_returned(self):
        async with HttpFetcher(ORIGIN, transport=transport([])) as fetch:
            response = await fetch(Request(url="/missing"))

        assert response.status_code == 404
        assert fetch.request_count == 1

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        async with HttpFetcher(ORIGIN, transport=transport([])) as fetch:
            with pytest.raises(httpx.ConnectError):
                await fetch(Request(url="/down"))

    @pytest.mark.asyncio
    async def test_forwards_method_and_body(self):
        seen = []
        async with HttpFetcher(ORIGIN, transport=transport(seen)) as fetch:
            await fetch(Request(method="POST", url="/api/applicants", content=b'{"a": 1}'))

        assert seen[0].method == "POST"
        assert seen[0].content == b'{"a": 1}'

    @pytest.mark.asyncio
    async def test_outside_context_fails(self):
        with pytest.raises(RuntimeError):
            await HttpFetcher(ORIGIN)(Request(url="/"))


class TestFetchWithRetry:
    @pytest.mark.asyncio
    async def test_single_attempt_reraises(self):
        calls = []

        async def fetch(request, cache_mode="default"):
            calls.append(cache_mode)
            raise httpx.ConnectError("down")

        with pytest.raises(httpx.ConnectError):
            await fetch_with_retry(fetch, Request(url="/"), attempts=1)
        assert calls == ["no-store"]

    @pytest.mark.asyncio
    async def test_error_status_not_retried(self):
        calls = []

        async def fetch(request, cache_mode="default"):
            calls.append(request.url)
            return httpx.Response(500)

        response = await fetch_with_retry(fetch, Request(url="/"), attempts=3)

        assert response.status_code == 500
        assert len(calls) == 1
