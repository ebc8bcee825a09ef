"""Cache component package."""
from .cache_policy import CachePolicy, DEFAULT_CACHE_DURATION_MS, now_ms
from .cache_storage import (
    COUNTRIES_KEY,
    HISTORICAL_PREFIX,
    LAST_UPDATE_KEY,
    CovidCacheStorage,
    historical_key,
)

__all__ = [
    "CachePolicy",
    "CovidCacheStorage",
    "DEFAULT_CACHE_DURATION_MS",
    "COUNTRIES_KEY",
    "LAST_UPDATE_KEY",
    "HISTORICAL_PREFIX",
    "historical_key",
    "now_ms",
]
