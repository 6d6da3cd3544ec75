"""Models package - DDL, config and entities."""

from app.models.common import CACHE_BUCKET_DDL, CACHE_ENTRY_DDL
from app.models.worker import (
    ActivateResult,
    CachedResponse,
    InstallResult,
    Request,
    RequestMode,
    WorkerConfig,
    is_from_cache,
)

ALL_DDL = [
    CACHE_BUCKET_DDL,
    CACHE_ENTRY_DDL,
]

__all__ = [
    # Common
    "CACHE_BUCKET_DDL",
    "CACHE_ENTRY_DDL",
    # Worker
    "WorkerConfig",
    "Request",
    "RequestMode",
    "CachedResponse",
    "is_from_cache",
    "InstallResult",
    "ActivateResult",
    # All DDL
    "ALL_DDL",
]
