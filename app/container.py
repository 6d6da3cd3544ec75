"""Dependency Injection container - initialized at app startup."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.models import WorkerConfig
from app.repositories import DuckDBCacheStorage, open_storage
from app.services import InMemoryClients, ServiceWorker, WorkerEnv
from settings import CACHE_DB_PATH, load_config
from sw_client import HttpFetcher


class Container:
    """Application DI container - holds the config and shared cache storage."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, config: WorkerConfig | None = None, db_path: str | None = None) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        self.config = config or load_config()
        self.caches: DuckDBCacheStorage = open_storage(db_path or CACHE_DB_PATH)
        self.clients = InMemoryClients()

        self._initialized = True

    def close(self) -> None:
        if self._initialized:
            self.caches.close()
            self._initialized = False

    @asynccontextmanager
    async def worker(self) -> AsyncIterator[ServiceWorker]:
        """A worker for the configured version, with a live network client."""
        self.init()
        async with HttpFetcher(self.config.origin) as fetcher:
            env = WorkerEnv(
                config=self.config,
                caches=self.caches,
                fetch=fetcher,
                clients=self.clients,
            )
            worker = ServiceWorker(env)
            try:
                yield worker
            finally:
                await worker.drain()


# Global container instance
container = Container()
