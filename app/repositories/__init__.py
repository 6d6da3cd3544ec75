"""Repositories package - cache bucket storage."""

from app.repositories.base import Cache, CacheStorage, cache_key
from app.repositories.db import connect, db_exists, init_tables
from app.repositories.duckdb_storage import DuckDBCache, DuckDBCacheStorage, open_storage
from app.repositories.memory import MemoryCache, MemoryCacheStorage

__all__ = [
    # DB
    "connect",
    "db_exists",
    "init_tables",
    # Interfaces
    "Cache",
    "CacheStorage",
    "cache_key",
    # Implementations
    "MemoryCache",
    "MemoryCacheStorage",
    "DuckDBCache",
    "DuckDBCacheStorage",
    "open_storage",
]
