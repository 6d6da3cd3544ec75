"""Install phase - pre-cache the asset manifest."""

import asyncio

from loguru import logger

from app.errors import PrecacheError
from app.models import CachedResponse, InstallResult, Request
from app.repositories import Cache
from app.services.env import WorkerEnv
from sw_client import fetch_with_retry


async def _precache(env: WorkerEnv, cache: Cache, path: str) -> None:
    url = env.config.resolve(path)
    response = await fetch_with_retry(env.fetch, Request(url=url), env.config.precache_attempts)
    if not response.is_success:
        raise PrecacheError(path, response.status_code)
    await cache.put(url, CachedResponse.from_response(response, url))


async def on_install(env: WorkerEnv) -> InstallResult:
    """Fetch every manifest path concurrently and store what succeeds.

    A failing path is logged and skipped. Installation always completes and,
    unless the config turns it off, ends by requesting skip-waiting.
    """
    config = env.config
    manifest = list(config.manifest)
    result = InstallResult(cache_name=config.cache_name)
    logger.info("Worker installing: {} ({} assets)", config.cache_name, len(manifest))

    try:
        cache = await env.caches.open(config.cache_name)
        outcomes = await asyncio.gather(
            *(_precache(env, cache, path) for path in manifest),
            return_exceptions=True,
        )
        for path, outcome in zip(manifest, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Could not cache {}: {}", path, outcome)
                result.failed.append(path)
            else:
                result.cached.append(path)
    except Exception as e:
        logger.error("Worker install failed: {}", e)
        result.failed = [p for p in manifest if p not in result.cached]

    if result.failed:
        logger.warning("Cached {}/{} assets", len(result.cached), len(manifest))
    else:
        logger.info("All {} assets cached", len(result.cached))

    if config.skip_waiting:
        env.skip_waiting()
    return result
