from typing import Dict, Optional

from covid_stats.storage.interface import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and ephemeral deployments."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def keys(self) -> list[str]:
        return sorted(self._data)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    def remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def clear(self) -> bool:
        self._data.clear()
        return True
