"""Worker models - config, requests, cached responses, phase results."""

from app.models.worker.config import DEFAULT_STATIC_EXTENSIONS, WorkerConfig
from app.models.worker.http import (
    FROM_CACHE_HEADER,
    CachedResponse,
    Request,
    RequestMode,
    is_from_cache,
)
from app.models.worker.results import ActivateResult, InstallResult

__all__ = [
    "DEFAULT_STATIC_EXTENSIONS",
    "WorkerConfig",
    "FROM_CACHE_HEADER",
    "CachedResponse",
    "Request",
    "RequestMode",
    "is_from_cache",
    "ActivateResult",
    "InstallResult",
]
