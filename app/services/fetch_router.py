"""Fetch routing - picks a caching strategy per request."""

import httpx
from loguru import logger

from app.errors import OfflineError
from app.models import Request
from app.services.env import WorkerEnv, safe_match, safe_put


async def on_fetch(env: WorkerEnv, request: Request) -> httpx.Response:
    """Answer a request from a controlled page.

    Non-GET requests go to the network untouched. GETs are routed:
    navigations network-first with the shell document as fallback, static
    assets stale-while-revalidate, anything else network-first with a
    fallback to its own cache entry.
    """
    if request.method != "GET":
        return await env.fetch(request)

    request = request.with_url(env.config.resolve(request.url))

    if request.is_navigation:
        return await _navigation(env, request)
    if env.config.is_static(request.url):
        return await _stale_while_revalidate(env, request)
    return await _network_first(env, request)


async def _navigation(env: WorkerEnv, request: Request) -> httpx.Response:
    shell_url = env.config.resolve(env.config.shell_path)
    try:
        response = await env.fetch(request)
    except httpx.RequestError as e:
        cached = await safe_match(env, shell_url)
        if cached is None:
            raise OfflineError(request.url, e) from e
        logger.info("Offline navigation to {}, serving shell", request.url)
        return cached.to_response()

    await safe_put(env, shell_url, response)
    return response


async def _stale_while_revalidate(env: WorkerEnv, request: Request) -> httpx.Response:
    cached = await safe_match(env, request)
    if cached is not None:
        env.wait_until(_revalidate(env, request))
        return cached.to_response()

    try:
        response = await env.fetch(request)
    except httpx.RequestError as e:
        raise OfflineError(request.url, e) from e
    await safe_put(env, request, response)
    return response


async def _revalidate(env: WorkerEnv, request: Request) -> None:
    try:
        response = await env.fetch(request)
    except httpx.RequestError as e:
        # stale copy already served; next load retries
        logger.debug("Background refresh failed for {}: {}", request.url, e)
        return
    await safe_put(env, request, response)


async def _network_first(env: WorkerEnv, request: Request) -> httpx.Response:
    try:
        response = await env.fetch(request)
    except httpx.RequestError as e:
        cached = await safe_match(env, request)
        if cached is None:
            raise OfflineError(request.url, e) from e
        logger.info("Offline, serving cached {}", request.url)
        return cached.to_response()

    await safe_put(env, request, response)
    return response
