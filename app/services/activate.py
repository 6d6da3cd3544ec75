"""Activate phase - sweep old buckets and take over open pages."""

import asyncio

from loguru import logger

from app.models import ActivateResult
from app.services.env import WorkerEnv


async def _delete_bucket(env: WorkerEnv, name: str) -> bool:
    logger.info("Deleting old cache: {}", name)
    return await env.caches.delete(name)


async def on_activate(env: WorkerEnv) -> ActivateResult:
    """Delete every bucket but the current one, claim and reload clients.

    Each deletion and each navigation is independent; failures are logged
    and never raised.
    """
    current = env.config.cache_name
    result = ActivateResult(kept=current)
    logger.info("Worker activating: {}", current)

    try:
        names = await env.caches.keys()
    except Exception as e:
        logger.error("Could not list caches: {}", e)
        names = []

    stale = [name for name in names if name != current]
    outcomes = await asyncio.gather(
        *(_delete_bucket(env, name) for name in stale),
        return_exceptions=True,
    )
    for name, outcome in zip(stale, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("Could not delete cache {}: {}", name, outcome)
            result.failed.append(name)
        elif outcome:
            result.deleted.append(name)
        else:
            logger.debug("Cache {} already gone", name)

    try:
        await env.clients.claim()
    except Exception as e:
        logger.error("Could not claim clients: {}", e)

    try:
        clients = await env.clients.list_clients()
    except Exception as e:
        logger.error("Could not list clients: {}", e)
        clients = []

    outcomes = await asyncio.gather(
        *(env.clients.navigate(client, client.url) for client in clients),
        return_exceptions=True,
    )
    for client, outcome in zip(clients, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("Could not reload client {}: {}", client.id, outcome)
        else:
            result.navigated.append(client.url)

    return result
