"""Application settings."""

import os
from pathlib import Path

from settings.manifest import CACHE_FILES, STATIC_EXTENSIONS

# Origin the worker fronts
ORIGIN = os.getenv("PWA_ORIGIN", "http://localhost:3000")

# Cache
CACHE_PREFIX = os.getenv("PWA_CACHE_PREFIX", "pwa-cache")
CACHE_VERSION = os.getenv("PWA_CACHE_VERSION", "277")  # bump to invalidate old buckets
CACHE_DB_PATH = os.getenv("PWA_CACHE_DB_PATH", "pwa_cache.duckdb")
SHELL_PATH = "/index.html"

# Logging
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Network
API_TIMEOUT = int(os.getenv("PWA_API_TIMEOUT", "30"))
MAX_CONCURRENT = int(os.getenv("PWA_MAX_CONCURRENT", "20"))
PRECACHE_ATTEMPTS = int(os.getenv("PWA_PRECACHE_ATTEMPTS", "1"))

# Lifecycle
SKIP_WAITING = os.getenv("PWA_SKIP_WAITING", "1") not in ("0", "false", "no")


def load_config(**overrides):
    """Build the worker config from settings. Call once at startup."""
    from app.models import WorkerConfig

    values = {
        "origin": ORIGIN,
        "cache_prefix": CACHE_PREFIX,
        "cache_version": CACHE_VERSION,
        "manifest": CACHE_FILES,
        "shell_path": SHELL_PATH,
        "static_extensions": STATIC_EXTENSIONS,
        "precache_attempts": PRECACHE_ATTEMPTS,
        "skip_waiting": SKIP_WAITING,
    }
    values.update(overrides)
    return WorkerConfig(**values)
