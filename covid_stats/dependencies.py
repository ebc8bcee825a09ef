from __future__ import annotations

from functools import lru_cache

from covid_stats.config import settings
from covid_stats.infrastructure.connectivity import (
    ConnectivityProbe,
    HttpConnectivityProbe,
    StaticConnectivityProbe,
)
from covid_stats.infrastructure.disease_api import DiseaseApiClient
from covid_stats.services.cache.cache_policy import CachePolicy
from covid_stats.services.cache.cache_storage import CovidCacheStorage
from covid_stats.services.covid_data_service import CovidDataService
from covid_stats.storage.factory import get_store
from covid_stats.storage.interface import KeyValueStore


@lru_cache(maxsize=None)
def get_kv_store() -> KeyValueStore:
    return get_store()


def get_cache_storage() -> CovidCacheStorage:
    return CovidCacheStorage(get_kv_store())


def get_cache_policy() -> CachePolicy:
    return CachePolicy(cache_duration_ms=settings.CACHE_DURATION_MS)


def get_provider() -> DiseaseApiClient:
    return DiseaseApiClient(
        base_url=settings.DISEASE_API_BASE_URL,
        timeout=settings.DISEASE_API_TIMEOUT,
    )


@lru_cache(maxsize=None)
def get_connectivity_probe() -> ConnectivityProbe:
    # One probe per process so listeners see every flip
    if settings.FORCE_OFFLINE:
        return StaticConnectivityProbe(initial=False)
    return HttpConnectivityProbe(
        check_url=settings.CONNECTIVITY_CHECK_URL,
        timeout=settings.CONNECTIVITY_TIMEOUT,
    )


def get_data_service() -> CovidDataService:
    return CovidDataService(
        provider=get_provider(),
        cache=get_cache_storage(),
        connectivity=get_connectivity_probe(),
        policy=get_cache_policy(),
    )
