"""DuckDB-backed cache storage - buckets survive process restarts."""

import asyncio
import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import duckdb
from loguru import logger

from app.models import CachedResponse, Request
from app.repositories.base import cache_key
from app.repositories.db import connect


def _utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _row_to_entry(row: tuple) -> CachedResponse:
    url, status_code, headers, content, stored_at = row
    return CachedResponse(
        url=url,
        status_code=status_code,
        headers=[tuple(h) for h in json.loads(headers)],
        content=bytes(content),
        stored_at=stored_at.replace(tzinfo=timezone.utc),
    )


class DuckDBCacheStorage:
    """Cache storage over one DuckDB file.

    Blocking DuckDB calls run in a worker thread, one at a time behind a
    lock, so the event loop keeps serving other fetches meanwhile.
    """

    def __init__(self, db_path: str | Path):
        self._db_path = db_path
        self._conn = connect(db_path)
        self._lock = threading.Lock()

    def close(self) -> None:
        self._conn.close()
        logger.debug("DB connection closed")

    def _run(self, query: str, params: list | None = None, fetch: bool = False) -> Any:
        with self._lock:
            cursor = self._conn.cursor()
            try:
                result = cursor.execute(query, params) if params else cursor.execute(query)
                return result.fetchall() if fetch else None
            finally:
                cursor.close()

    def _create_bucket(self, name: str) -> bool:
        """Insert the bucket unless present; check and insert hold one lock."""
        with self._lock:
            cursor = self._conn.cursor()
            try:
                before = cursor.execute("SELECT COUNT(*) FROM cache_bucket WHERE name = ?", [name]).fetchone()[0]
                cursor.execute(
                    "INSERT OR IGNORE INTO cache_bucket (name, created_at) VALUES (?, ?)",
                    [name, _utc_naive(datetime.now(timezone.utc))],
                )
                return before == 0
            finally:
                cursor.close()

    def _drop_bucket(self, name: str) -> bool:
        with self._lock:
            cursor = self._conn.cursor()
            try:
                if not cursor.execute("SELECT 1 FROM cache_bucket WHERE name = ?", [name]).fetchall():
                    return False
                cursor.execute("DELETE FROM cache_entry WHERE cache_name = ?", [name])
                cursor.execute("DELETE FROM cache_bucket WHERE name = ?", [name])
                return True
            finally:
                cursor.close()

    async def _execute(self, query: str, params: list | None = None) -> None:
        await asyncio.to_thread(self._run, query, params)

    async def _fetchall(self, query: str, params: list | None = None) -> list:
        return await asyncio.to_thread(self._run, query, params, True)

    async def open(self, name: str) -> "DuckDBCache":
        if await asyncio.to_thread(self._create_bucket, name):
            logger.debug("Cache bucket created: {}", name)
        return DuckDBCache(self, name)

    async def has(self, name: str) -> bool:
        rows = await self._fetchall("SELECT 1 FROM cache_bucket WHERE name = ?", [name])
        return bool(rows)

    async def delete(self, name: str) -> bool:
        return await asyncio.to_thread(self._drop_bucket, name)

    async def keys(self) -> list[str]:
        rows = await self._fetchall("SELECT name FROM cache_bucket ORDER BY created_at, name")
        return [r[0] for r in rows]

    async def match(self, request: Request | str) -> CachedResponse | None:
        method, url = cache_key(request)
        rows = await self._fetchall(
            """
            SELECT e.url, e.status_code, e.headers, e.content, e.stored_at
            FROM cache_entry e
            JOIN cache_bucket b ON b.name = e.cache_name
            WHERE e.method = ? AND e.url = ?
            ORDER BY b.created_at, b.name
            LIMIT 1
            """,
            [method, url],
        )
        return _row_to_entry(rows[0]) if rows else None


class DuckDBCache:
    """One bucket inside a DuckDBCacheStorage."""

    def __init__(self, storage: DuckDBCacheStorage, name: str):
        self._storage = storage
        self.name = name

    async def match(self, request: Request | str) -> CachedResponse | None:
        method, url = cache_key(request)
        rows = await self._storage._fetchall(
            """
            SELECT url, status_code, headers, content, stored_at
            FROM cache_entry WHERE cache_name = ? AND method = ? AND url = ?
            """,
            [self.name, method, url],
        )
        return _row_to_entry(rows[0]) if rows else None

    async def put(self, request: Request | str, response: CachedResponse) -> None:
        method, url = cache_key(request)
        await self._storage._execute(
            """
            INSERT OR REPLACE INTO cache_entry
                (cache_name, method, url, status_code, headers, content, stored_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                self.name,
                method,
                url,
                response.status_code,
                json.dumps([list(h) for h in response.headers]),
                response.content,
                _utc_naive(response.stored_at),
            ],
        )

    async def delete(self, request: Request | str) -> bool:
        if await self.match(request) is None:
            return False
        method, url = cache_key(request)
        await self._storage._execute(
            "DELETE FROM cache_entry WHERE cache_name = ? AND method = ? AND url = ?",
            [self.name, method, url],
        )
        return True

    async def keys(self) -> list[tuple[str, str]]:
        rows = await self._storage._fetchall(
            "SELECT method, url FROM cache_entry WHERE cache_name = ? ORDER BY stored_at, url",
            [self.name],
        )
        return [(r[0], r[1]) for r in rows]


def open_storage(db_path: str | Path) -> DuckDBCacheStorage:
    """Open the persistent cache storage at db_path."""
    try:
        return DuckDBCacheStorage(db_path)
    except duckdb.IOException as e:
        logger.error("Cannot open cache DB {}: {}", db_path, e)
        raise
