"""
Async client for the disease.sh COVID-19 API.

Each call resolves to a ``ProviderResult`` instead of raising, so callers can
branch on success and fall back to cache without exception handling.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar
from urllib.parse import quote

import httpx

from covid_stats.domain.errors import RemoteProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_COUNTRIES_ENDPOINT = "/countries"
COUNTRY_ENDPOINT = "/countries"
HISTORICAL_ENDPOINT = "/historical"


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class DiseaseApiClient:
    """Read-only access to the three endpoints the cache engine needs."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException:
            raise RemoteProviderError(f"Request to {path} timed out")
        except httpx.HTTPStatusError as e:
            raise RemoteProviderError(f"Request to {path} failed: HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            raise RemoteProviderError(f"Request to {path} failed: {str(e)}")
        except ValueError as e:
            raise RemoteProviderError(f"Invalid JSON from {path}: {str(e)}")

    async def get_all_countries(self) -> ProviderResult[List[Dict[str, Any]]]:
        try:
            data = await self._get_json(ALL_COUNTRIES_ENDPOINT)
        except RemoteProviderError as e:
            logger.error(f"Error fetching all countries: {e}")
            return ProviderResult(success=False, error=str(e))
        if not isinstance(data, list):
            logger.error("Error fetching all countries: response is not a list")
            return ProviderResult(success=False, error="Unexpected response shape for country list")
        return ProviderResult(success=True, data=data)

    async def get_country(self, country_name: str) -> ProviderResult[Dict[str, Any]]:
        try:
            data = await self._get_json(f"{COUNTRY_ENDPOINT}/{quote(country_name, safe='')}")
        except RemoteProviderError as e:
            logger.error(f"Error fetching country {country_name}: {e}")
            return ProviderResult(success=False, error=str(e))
        return ProviderResult(success=True, data=data)

    async def get_historical(self, country_name: str, days: str = "all") -> ProviderResult[Dict[str, Any]]:
        try:
            data = await self._get_json(
                f"{HISTORICAL_ENDPOINT}/{quote(country_name, safe='')}",
                params={"lastdays": days},
            )
        except RemoteProviderError as e:
            logger.error(f"Error fetching historical data for {country_name}: {e}")
            return ProviderResult(success=False, error=str(e))
        return ProviderResult(success=True, data=data)
