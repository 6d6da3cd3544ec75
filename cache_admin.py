#!/usr/bin/env python3
"""
Inspect and drive the offline cache from the command line.

Usage:
    python cache_admin.py install              # Pre-cache the manifest, then activate
    python cache_admin.py activate             # Delete every bucket but the current one
    python cache_admin.py list                 # Show buckets and their entries
    python cache_admin.py fetch /some/path     # Route one GET through the worker
    python cache_admin.py fetch / --navigate   # ... as a page navigation
    python cache_admin.py clear                # Delete every bucket
"""

import asyncio
import sys

from app.container import container
from app.errors import OfflineError
from app.models import Request, RequestMode, is_from_cache
from app.services import Registration, on_activate, on_fetch
from settings.logging import setup_logging

logger = setup_logging(level="INFO", to_file=True)


async def run_install() -> bool:
    """Install and activate the configured worker version."""
    registration = Registration()
    async with container.worker() as worker:
        await registration.register(worker)

    result = worker.install_result
    print("\n" + "=" * 60)
    print(f"INSTALL REPORT - {result.cache_name}")
    print("=" * 60)
    print(f"  Cached: {len(result.cached)}")
    print(f"  Failed: {len(result.failed)}")
    for path in result.failed:
        print(f"  ⚠️  {path}")
    if worker.activate_result and worker.activate_result.deleted:
        print(f"  Removed old caches: {', '.join(worker.activate_result.deleted)}")
    print("=" * 60 + "\n")
    return result.complete


async def run_activate() -> None:
    async with container.worker() as worker:
        result = await on_activate(worker.env)
    logger.info("Kept {}, deleted {}", result.kept, result.deleted or "nothing")


async def run_list() -> None:
    """Print every bucket and its entries."""
    container.init()
    names = await container.caches.keys()
    if not names:
        print("\n⚠️  No caches found. Run 'python cache_admin.py install' first.\n")
        return

    current = container.config.cache_name
    for name in names:
        bucket = await container.caches.open(name)
        keys = await bucket.keys()
        marker = " (current)" if name == current else ""
        print(f"\n{name}{marker} - {len(keys):,} entries")
        for method, url in keys:
            print(f"  {method} {url}")
    print()


async def run_fetch(url: str, navigate: bool) -> bool:
    mode = RequestMode.NAVIGATE if navigate else RequestMode.CORS
    async with container.worker() as worker:
        try:
            response = await on_fetch(worker.env, Request(url=url, mode=mode))
        except OfflineError as e:
            logger.error("{}", e.message)
            return False
    source = "cache" if is_from_cache(response) else "network"
    print(f"\n{response.status_code} {url} ({source}, {len(response.content):,} bytes)\n")
    return True


async def run_clear() -> None:
    container.init()
    for name in await container.caches.keys():
        await container.caches.delete(name)
        logger.info("Deleted cache {}", name)


def main():
    args = sys.argv[1:]
    if not args:
        print(__doc__)
        sys.exit(1)

    command, rest = args[0], args[1:]
    try:
        if command == "install":
            ok = asyncio.run(run_install())
        elif command == "activate":
            asyncio.run(run_activate())
            ok = True
        elif command == "list":
            asyncio.run(run_list())
            ok = True
        elif command == "fetch":
            paths = [a for a in rest if not a.startswith("--")]
            if not paths:
                print(__doc__)
                sys.exit(1)
            ok = asyncio.run(run_fetch(paths[0], navigate="--navigate" in rest))
        elif command == "clear":
            asyncio.run(run_clear())
            ok = True
        else:
            print(__doc__)
            sys.exit(1)
    finally:
        container.close()

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
