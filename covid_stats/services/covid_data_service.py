"""
Freshness-gated access to COVID-19 statistics.

Reconciles the disease.sh provider with the local cache for three resources:

- the country list, trusted from cache while younger than the cache duration;
- a single country, fetched remotely when online, else looked up in the cached list;
- a country's historical series, always refetched when online and cached per country.

Every operation resolves to an ``Outcome`` (``Fresh``, ``Cached`` or
``Unavailable``); no exception leaves this module.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from covid_stats.domain.events import (
    CacheFallbackUsed,
    CountriesRefreshed,
    HistoricalRefreshed,
    event_publisher,
)
from covid_stats.domain.models import CountryRecord, HistoricalSeries
from covid_stats.domain.outcomes import (
    MESSAGE_FAULT,
    MESSAGE_OFFLINE,
    Cached,
    Fresh,
    Outcome,
    Unavailable,
)
from covid_stats.infrastructure.disease_api import ProviderResult
from covid_stats.services.cache.cache_policy import CachePolicy
from covid_stats.services.cache.cache_storage import CovidCacheStorage

logger = logging.getLogger(__name__)

ERROR_NO_DATA = "No data available"
ERROR_COUNTRY_UNAVAILABLE = "Country data not available"
ERROR_HISTORICAL_UNAVAILABLE = "Historical data not available"


class SupportsCovidProvider(Protocol):
    async def get_all_countries(self) -> ProviderResult[List[Dict[str, Any]]]: ...

    async def get_country(self, country_name: str) -> ProviderResult[Dict[str, Any]]: ...

    async def get_historical(self, country_name: str, days: str = "all") -> ProviderResult[Dict[str, Any]]: ...


class SupportsConnectivity(Protocol):
    async def current_status(self) -> bool: ...


class CovidDataService:
    """Decide per request whether to serve cache, fetch remote, or fall back."""

    def __init__(
        self,
        provider: SupportsCovidProvider,
        cache: CovidCacheStorage,
        connectivity: SupportsConnectivity,
        policy: CachePolicy,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._connectivity = connectivity
        self._policy = policy

    # --------------- Internal helpers ---------------
    def _cached_countries(self) -> Optional[List[CountryRecord]]:
        cached = self._cache.get_countries()
        if cached is None:
            return None
        return CountryRecord.from_list(cached)

    def _cached_historical(self, country_name: str) -> Optional[HistoricalSeries]:
        cached = self._cache.get_historical(country_name)
        if cached is None:
            return None
        return HistoricalSeries.from_payload(cached)

    @staticmethod
    def _fallback_used(resource: str, reason: str) -> None:
        event_publisher.publish(CacheFallbackUsed(
            event_id="",
            timestamp=None,
            aggregate_id=resource,
            resource=resource,
            reason=reason,
        ))

    # --------------- Public API ---------------
    async def fetch_all_countries(self, force_refresh: bool = False) -> Outcome[List[CountryRecord]]:
        """Return the country list, from cache while fresh, else from remote."""
        try:
            online = await self._connectivity.current_status()
            stale = self._policy.is_stale(self._cache.get_last_update())

            if not force_refresh and not stale:
                cached = self._cached_countries()
                if cached is not None:
                    return Cached(cached)

            if online and (force_refresh or stale):
                response = await self._provider.get_all_countries()
                if response.success and response.data is not None:
                    countries = CountryRecord.from_list(response.data)
                    updated_at_ms = self._policy.now()
                    self._cache.save_countries(response.data, updated_at_ms)
                    event_publisher.publish(CountriesRefreshed(
                        event_id="",
                        timestamp=None,
                        aggregate_id="countries",
                        country_count=len(countries),
                        updated_at_ms=updated_at_ms,
                    ))
                    return Fresh(countries)

            cached = self._cached_countries()
            if cached is not None:
                self._fallback_used("countries", MESSAGE_OFFLINE)
                return Cached(cached, message=MESSAGE_OFFLINE)

            return Unavailable(ERROR_NO_DATA, data=[])
        except Exception as e:
            logger.exception("Error in fetch_all_countries")
            try:
                cached = self._cached_countries()
            except Exception as cache_error:
                logger.exception("Cache fallback failed in fetch_all_countries")
                return Unavailable(str(cache_error), data=[])
            if cached is not None:
                self._fallback_used("countries", MESSAGE_FAULT)
                return Cached(cached, message=MESSAGE_FAULT)
            return Unavailable(str(e), data=[])

    async def fetch_country_details(self, country_name: str) -> Outcome[Optional[CountryRecord]]:
        """Return one country, remotely when online, else by exact name from the cached list."""
        try:
            online = await self._connectivity.current_status()

            if online:
                response = await self._provider.get_country(country_name)
                if response.success and response.data is not None:
                    return Fresh(CountryRecord.from_payload(response.data))

            cached = self._cache.get_countries()
            if cached is not None:
                match = next((item for item in cached if item.get("country") == country_name), None)
                if match is not None:
                    self._fallback_used(f"country:{country_name}", "offline or API unavailable")
                    return Cached(CountryRecord.from_payload(match))

            return Unavailable(ERROR_COUNTRY_UNAVAILABLE)
        except Exception as e:
            logger.exception(f"Error in fetch_country_details for {country_name!r}")
            return Unavailable(str(e))

    async def fetch_historical_data(self, country_name: str, days: str = "all") -> Outcome[Optional[HistoricalSeries]]:
        """Return a country's series; always refetched when online, cache is the fallback."""
        try:
            online = await self._connectivity.current_status()

            # Read once up front, reused as the fallback below
            cached = self._cached_historical(country_name)

            if online:
                response = await self._provider.get_historical(country_name, days)
                if response.success and response.data is not None:
                    series = HistoricalSeries.from_payload(response.data)
                    self._cache.save_historical(country_name, response.data)
                    event_publisher.publish(HistoricalRefreshed(
                        event_id="",
                        timestamp=None,
                        aggregate_id=country_name,
                        country=country_name,
                        days=str(days),
                    ))
                    return Fresh(series)

            if cached is not None:
                self._fallback_used(f"historical:{country_name}", "offline or API unavailable")
                return Cached(cached)

            return Unavailable(ERROR_HISTORICAL_UNAVAILABLE)
        except Exception as e:
            logger.exception(f"Error in fetch_historical_data for {country_name!r}")
            try:
                cached = self._cached_historical(country_name)
            except Exception as cache_error:
                logger.exception("Cache fallback failed in fetch_historical_data")
                return Unavailable(str(cache_error))
            if cached is not None:
                self._fallback_used(f"historical:{country_name}", "error")
                return Cached(cached)
            return Unavailable(str(e))

    async def refresh_data(self) -> Outcome[List[CountryRecord]]:
        return await self.fetch_all_countries(force_refresh=True)

    def clear_cache(self) -> bool:
        try:
            return self._cache.clear_all()
        except Exception:
            logger.exception("Error clearing cache")
            return False

    def clear_historical(self, country_name: str) -> bool:
        """Evict one country's cached series; the next offline read misses."""
        try:
            return self._cache.remove_historical(country_name)
        except Exception:
            logger.exception(f"Error clearing historical cache for {country_name!r}")
            return False

    def cache_status(self) -> Dict[str, Any]:
        last_update = self._cache.get_last_update()
        return {
            "last_update": last_update,
            "age_ms": self._policy.age_ms(last_update),
            "stale": self._policy.is_stale(last_update),
            "cache_duration_ms": self._policy.cache_duration_ms,
        }
