"""Network client package."""

from sw_client.base import (
    NO_STORE_HEADERS,
    RETRYABLE_ERRORS,
    CacheMode,
    Fetch,
    HttpFetcher,
    fetch_with_retry,
)

__all__ = [
    "NO_STORE_HEADERS",
    "RETRYABLE_ERRORS",
    "CacheMode",
    "Fetch",
    "HttpFetcher",
    "fetch_with_retry",
]
