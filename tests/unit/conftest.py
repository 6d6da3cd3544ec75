"""Shared fixtures - fake network, recording storage, worker env."""

import httpx
import pytest

from app.models import Request, WorkerConfig
from app.repositories import MemoryCacheStorage
from app.services import InMemoryClients, WorkerEnv

ORIGIN = "http://app.test"


class FakeNetwork:
    """Scripted network: url -> (status, body) or an exception to raise."""

    def __init__(self, routes: dict | None = None):
        self.routes: dict[str, tuple[int, bytes] | Exception] = {}
        for url, route in (routes or {}).items():
            self.set(url, route)
        self.calls: list[tuple[str, str, str]] = []

    def set(self, url: str, route) -> None:
        if isinstance(route, tuple) and isinstance(route[1], str):
            route = (route[0], route[1].encode())
        self.routes[url if url.startswith("http") else ORIGIN + url] = route

    def offline(self) -> None:
        for url in self.routes:
            self.routes[url] = httpx.ConnectError("offline")

    async def __call__(self, request: Request, cache_mode: str = "default") -> httpx.Response:
        self.calls.append((request.method, request.url, cache_mode))
        url = request.url if request.url.startswith("http") else ORIGIN + request.url
        route = self.routes.get(url, httpx.ConnectError(f"no route to {url}"))
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, content=body, headers={"content-type": "text/html"})

    def urls(self) -> list[str]:
        return [url for _, url, _ in self.calls]


class RecordingStorage(MemoryCacheStorage):
    """Memory storage that records every call made on it."""

    def __init__(self):
        super().__init__()
        self.calls: list[str] = []

    async def open(self, name):
        self.calls.append(f"open:{name}")
        return await super().open(name)

    async def match(self, request):
        self.calls.append("match")
        return await super().match(request)

    async def keys(self):
        self.calls.append("keys")
        return await super().keys()

    async def delete(self, name):
        self.calls.append(f"delete:{name}")
        return await super().delete(name)


def make_config(**overrides) -> WorkerConfig:
    values = {
        "origin": ORIGIN,
        "cache_version": "277",
        "manifest": ("/", "/index.html"),
    }
    values.update(overrides)
    return WorkerConfig(**values)


def make_env(config=None, caches=None, network=None, clients=None) -> WorkerEnv:
    return WorkerEnv(
        config=config or make_config(),
        caches=caches if caches is not None else RecordingStorage(),
        fetch=network if network is not None else FakeNetwork(),
        clients=clients if clients is not None else InMemoryClients(),
    )


@pytest.fixture
def network():
    return FakeNetwork(
        {
            "/": (200, "<html>root</html>"),
            "/index.html": (200, "<html>shell v1</html>"),
        }
    )


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def env(network, storage):
    return make_env(caches=storage, network=network)
