"""
Test configuration and fixtures for covid_stats tests.
"""
import asyncio
import copy

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, Mock

from covid_stats.main import app
from covid_stats.dependencies import get_connectivity_probe, get_data_service
from covid_stats.domain.events import event_publisher
from covid_stats.infrastructure.connectivity import StaticConnectivityProbe
from covid_stats.infrastructure.disease_api import ProviderResult
from covid_stats.services.cache.cache_policy import CachePolicy
from covid_stats.services.cache.cache_storage import CovidCacheStorage
from covid_stats.services.covid_data_service import CovidDataService
from covid_stats.storage.memory import MemoryKeyValueStore

HOUR_MS = 3_600_000
START_MS = 1_700_000_000_000

USA = {
    "country": "USA",
    "countryInfo": {"_id": 840, "iso2": "US", "iso3": "USA", "lat": 38, "long": -97,
                    "flag": "https://disease.sh/assets/img/flags/us.png"},
    "continent": "North America",
    "updated": 1_699_999_000_000,
    "cases": 1000,
    "todayCases": 10,
    "deaths": 25,
    "todayDeaths": 1,
    "recovered": 900,
    "todayRecovered": 5,
    "active": 75,
    "critical": 3,
    "population": 331_000_000,
}

FRANCE = {
    "country": "France",
    "countryInfo": {"_id": 250, "iso2": "FR", "iso3": "FRA", "lat": 46, "long": 2, "flag": ""},
    "continent": "Europe",
    "cases": 5000,
    "deaths": 100,
    "recovered": 4500,
    "active": 400,
}

USA_HISTORICAL = {
    "country": "USA",
    "province": ["mainland"],
    "timeline": {
        "cases": {"3/1/21": 10, "3/2/21": 20},
        "deaths": {"3/1/21": 1},
        "recovered": {},
    },
}


def run(coro):
    """Drive a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


class FakeClock:
    """Millisecond clock that only moves when a test says so."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def reset_event_publisher():
    yield
    event_publisher.clear_subscribers()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def cache(kv_store):
    return CovidCacheStorage(kv_store)


@pytest.fixture
def policy(clock):
    return CachePolicy(cache_duration_ms=HOUR_MS, clock=clock)


@pytest.fixture
def provider():
    """Provider double whose three calls succeed with sample payloads by default."""
    mock = Mock()
    mock.get_all_countries = AsyncMock(
        return_value=ProviderResult(success=True, data=copy.deepcopy([USA, FRANCE]))
    )
    mock.get_country = AsyncMock(
        return_value=ProviderResult(success=True, data=copy.deepcopy(USA))
    )
    mock.get_historical = AsyncMock(
        return_value=ProviderResult(success=True, data=copy.deepcopy(USA_HISTORICAL))
    )
    return mock


@pytest.fixture
def probe():
    return StaticConnectivityProbe(initial=True)


@pytest.fixture
def service(provider, cache, probe, policy):
    return CovidDataService(provider=provider, cache=cache, connectivity=probe, policy=policy)


@pytest.fixture
def client(service, probe):
    """Create test client wired to the in-memory service."""
    app.dependency_overrides[get_data_service] = lambda: service
    app.dependency_overrides[get_connectivity_probe] = lambda: probe
    yield TestClient(app)
    app.dependency_overrides.clear()
