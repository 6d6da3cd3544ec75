"""Common models - shared tables."""

from app.models.common.cache import CACHE_BUCKET_DDL, CACHE_ENTRY_DDL

__all__ = [
    "CACHE_BUCKET_DDL",
    "CACHE_ENTRY_DDL",
]
