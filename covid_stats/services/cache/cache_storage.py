from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from covid_stats.domain.errors import StorageError
from covid_stats.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)

COUNTRIES_KEY = "@covid19_countries"
LAST_UPDATE_KEY = "@covid19_last_update"
HISTORICAL_PREFIX = "@covid19_historical_"


def historical_key(country_name: str) -> str:
    # No normalization: "USA" and "usa" are different slots
    return f"{HISTORICAL_PREFIX}{country_name}"


class CovidCacheStorage:
    """Map the logical cache slots onto store keys and JSON-encode their values.

    Reads that fail (backend error or undecodable JSON) are logged and
    reported as a miss; writes that fail are logged and reported as ``False``.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _write(self, key: str, value: Any) -> bool:
        try:
            return self._store.set(key, json.dumps(value))
        except (StorageError, TypeError, ValueError) as e:
            logger.error(f"Error storing {key}: {e}")
            return False

    def _read(self, key: str) -> Any:
        try:
            raw = self._store.get(key)
        except StorageError as e:
            logger.error(f"Error retrieving {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Discarding undecodable cache entry {key}: {e}")
            return None

    # --------------- Country list ---------------
    def save_countries(self, countries: List[Dict[str, Any]], updated_at_ms: int) -> bool:
        """Persist the raw list, then stamp the freshness marker if that succeeded."""
        saved = self._write(COUNTRIES_KEY, countries)
        if saved:
            self.set_last_update(updated_at_ms)
        return saved

    def get_countries(self) -> Optional[List[Dict[str, Any]]]:
        data = self._read(COUNTRIES_KEY)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.error(f"Ignoring malformed country list cache entry ({type(data).__name__})")
            return None
        return data

    # --------------- Freshness marker ---------------
    def get_last_update(self) -> Optional[int]:
        value = self._read(LAST_UPDATE_KEY)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
        return None

    def set_last_update(self, timestamp_ms: int) -> bool:
        return self._write(LAST_UPDATE_KEY, timestamp_ms)

    # --------------- Historical series ---------------
    def save_historical(self, country_name: str, data: Dict[str, Any]) -> bool:
        return self._write(historical_key(country_name), data)

    def get_historical(self, country_name: str) -> Optional[Dict[str, Any]]:
        data = self._read(historical_key(country_name))
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.error(f"Ignoring malformed historical cache entry for {country_name!r}")
            return None
        return data

    def remove_historical(self, country_name: str) -> bool:
        try:
            return self._store.remove(historical_key(country_name))
        except StorageError as e:
            logger.error(f"Error removing historical data for {country_name!r}: {e}")
            return False

    # --------------- Maintenance ---------------
    def clear_all(self) -> bool:
        try:
            return self._store.clear()
        except StorageError as e:
            logger.error(f"Error clearing all data: {e}")
            return False
