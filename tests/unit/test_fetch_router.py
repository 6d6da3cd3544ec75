"""Tests for fetch routing strategies."""

import asyncio

import httpx
import pytest

from app.errors import OfflineError
from app.models import CachedResponse, Request, RequestMode, is_from_cache
from app.repositories import DuckDBCacheStorage
from app.services import on_fetch
from conftest import ORIGIN, RecordingStorage, make_env

SHELL = f"{ORIGIN}/index.html"
APP_JS = f"{ORIGIN}/static/app.js"
API = f"{ORIGIN}/api/applicants"


async def seed(storage, url: str, body: bytes, name: str = "pwa-cache-v277") -> None:
    bucket = await storage.open(name)
    await bucket.put(url, CachedResponse(url=url, status_code=200, content=body))


def navigate(url: str) -> Request:
    return Request(url=url, mode=RequestMode.NAVIGATE)


class FailingStorage(RecordingStorage):
    async def match(self, request):
        raise OSError("cache read failed")

    async def open(self, name):
        raise OSError("cache write failed")


class TestPassThrough:
    @pytest.mark.asyncio
    async def test_non_get_skips_cache(self, env, network, storage):
        network.set("/api/applicants", (201, "created"))

        response = await on_fetch(env, Request(method="post", url=API, content=b"{}"))

        assert response.status_code == 201
        assert network.calls == [("POST", API, "default")]
        assert storage.calls == []

    @pytest.mark.asyncio
    async def test_relative_url_resolved_against_origin(self, env, network):
        network.set("/api/applicants", (200, "[]"))

        await on_fetch(env, Request(url="/api/applicants#top"))

        assert network.urls() == [API]


class TestNavigation:
    @pytest.mark.asyncio
    async def test_online_returns_live_and_updates_shell(self, env, network, storage):
        await seed(storage, SHELL, b"old shell")
        network.set("/home", (200, "<html>shell v2</html>"))

        response = await on_fetch(env, navigate(f"{ORIGIN}/home"))

        assert response.content == b"<html>shell v2</html>"
        assert not is_from_cache(response)
        assert (await storage.match(SHELL)).content == b"<html>shell v2</html>"

    @pytest.mark.asyncio
    async def test_offline_serves_cached_shell(self, env, network, storage):
        await seed(storage, SHELL, b"<html>cached shell</html>")
        network.offline()

        response = await on_fetch(env, navigate(f"{ORIGIN}/track-application"))

        assert response.status_code == 200
        assert response.content == b"<html>cached shell</html>"
        assert is_from_cache(response)

    @pytest.mark.asyncio
    async def test_offline_without_shell_fails(self, env, network):
        network.offline()

        with pytest.raises(OfflineError) as exc:
            await on_fetch(env, navigate(f"{ORIGIN}/home"))

        assert isinstance(exc.value.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_error_page_not_stored_as_shell(self, env, network, storage):
        await seed(storage, SHELL, b"good shell")
        network.set("/home", (503, "maintenance"))

        response = await on_fetch(env, navigate(f"{ORIGIN}/home"))

        assert response.status_code == 503
        assert (await storage.match(SHELL)).content == b"good shell"


class TestStaticAssets:
    @pytest.mark.asyncio
    async def test_serves_cached_then_refreshes(self, env, network, storage):
        await seed(storage, APP_JS, b"old js")
        network.set(APP_JS, (200, "new js"))

        response = await on_fetch(env, Request(url=APP_JS))

        assert response.content == b"old js"
        assert is_from_cache(response)
        await env.drain()
        assert (await storage.match(APP_JS)).content == b"new js"

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_stale_entry(self, env, network, storage):
        await seed(storage, APP_JS, b"old js")
        network.set(APP_JS, httpx.ConnectError("offline"))

        response = await on_fetch(env, Request(url=APP_JS))
        await env.drain()

        assert response.content == b"old js"
        assert (await storage.match(APP_JS)).content == b"old js"

    @pytest.mark.asyncio
    async def test_non_ok_refresh_keeps_stale_entry(self, env, network, storage):
        await seed(storage, APP_JS, b"old js")
        network.set(APP_JS, (404, "gone"))

        await on_fetch(env, Request(url=APP_JS))
        await env.drain()

        assert (await storage.match(APP_JS)).content == b"old js"

    @pytest.mark.asyncio
    async def test_cache_miss_waits_for_network(self, env, network, storage):
        network.set(APP_JS, (200, "fresh js"))

        response = await on_fetch(env, Request(url=APP_JS))

        assert response.content == b"fresh js"
        assert not is_from_cache(response)
        assert (await storage.match(APP_JS)).content == b"fresh js"

    @pytest.mark.asyncio
    async def test_cache_miss_offline_fails(self, env, network):
        network.set(APP_JS, httpx.ConnectError("offline"))

        with pytest.raises(OfflineError):
            await on_fetch(env, Request(url=APP_JS))

    @pytest.mark.asyncio
    async def test_extension_match_ignores_query(self, env, network, storage):
        url = f"{ORIGIN}/static/site.css?v=3"
        await seed(storage, url, b"css")
        network.set(url, (200, "css2"))

        response = await on_fetch(env, Request(url=url))

        assert response.content == b"css"
        await env.drain()


class TestNetworkFirst:
    @pytest.mark.asyncio
    async def test_online_caches_response(self, env, network, storage):
        network.set(API, (200, '[{"id": 1}]'))

        response = await on_fetch(env, Request(url=API))

        assert response.json() == [{"id": 1}]
        assert (await storage.match(API)).content == b'[{"id": 1}]'

    @pytest.mark.asyncio
    async def test_offline_serves_last_cached(self, env, network, storage):
        await seed(storage, API, b"[]")
        network.set(API, httpx.ConnectError("offline"))

        response = await on_fetch(env, Request(url=API))

        assert response.content == b"[]"
        assert is_from_cache(response)

    @pytest.mark.asyncio
    async def test_offline_without_cache_fails(self, env):
        with pytest.raises(OfflineError) as exc:
            await on_fetch(env, Request(url=API))
        assert exc.value.url == API


class TestCacheFailures:
    @pytest.mark.asyncio
    async def test_write_failure_still_serves_network(self, network):
        env = make_env(caches=FailingStorage(), network=network)
        network.set(API, (200, "live"))

        response = await on_fetch(env, Request(url=API))

        assert response.content == b"live"

    @pytest.mark.asyncio
    async def test_read_failure_is_a_miss(self, network):
        env = make_env(caches=FailingStorage(), network=network)
        network.offline()

        with pytest.raises(OfflineError):
            await on_fetch(env, Request(url=API))


class TestOtherRequestErrors:
    @pytest.mark.asyncio
    async def test_redirect_loop_navigation_serves_shell(self, env, network, storage):
        await seed(storage, SHELL, b"<html>cached shell</html>")
        network.set("/home", httpx.TooManyRedirects("loop"))

        response = await on_fetch(env, navigate(f"{ORIGIN}/home"))

        assert response.content == b"<html>cached shell</html>"
        assert is_from_cache(response)

    @pytest.mark.asyncio
    async def test_decoding_error_on_refresh_is_contained(self, env, network, storage):
        await seed(storage, APP_JS, b"old js")
        network.set(APP_JS, httpx.DecodingError("bad gzip"))
        tasks = []
        schedule = env.wait_until
        env.wait_until = lambda coro: tasks.append(schedule(coro)) or tasks[-1]

        response = await on_fetch(env, Request(url=APP_JS))
        await env.drain()

        assert response.content == b"old js"
        assert len(tasks) == 1
        assert tasks[0].exception() is None
        assert (await storage.match(APP_JS)).content == b"old js"

    @pytest.mark.asyncio
    async def test_redirect_loop_api_falls_back_to_cache(self, env, network, storage):
        await seed(storage, API, b"[]")
        network.set(API, httpx.TooManyRedirects("loop"))

        response = await on_fetch(env, Request(url=API))

        assert response.content == b"[]"

    @pytest.mark.asyncio
    async def test_static_miss_with_decoding_error_is_offline(self, env, network):
        network.set(APP_JS, httpx.DecodingError("bad gzip"))

        with pytest.raises(OfflineError):
            await on_fetch(env, Request(url=APP_JS))


class TestDuckDBBacked:
    @pytest.mark.asyncio
    async def test_concurrent_fetches_all_cached(self, tmp_path, network):
        storage = DuckDBCacheStorage(tmp_path / "cache.duckdb")
        env = make_env(caches=storage, network=network)
        urls = [f"{ORIGIN}/api/applicants/{i}" for i in range(10)]
        for url in urls:
            network.set(url, (200, url))

        try:
            responses = await asyncio.gather(*(on_fetch(env, Request(url=url)) for url in urls))

            assert [r.status_code for r in responses] == [200] * 10
            bucket = await storage.open("pwa-cache-v277")
            assert sorted(url for _, url in await bucket.keys()) == sorted(urls)
        finally:
            storage.close()
