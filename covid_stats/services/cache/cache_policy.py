from __future__ import annotations

import time
from typing import Callable, Optional

DEFAULT_CACHE_DURATION_MS = 3_600_000


def now_ms() -> int:
    return int(time.time() * 1000)


class CachePolicy:
    """Encapsulate the staleness rule for the country-list cache."""

    def __init__(
        self,
        cache_duration_ms: int = DEFAULT_CACHE_DURATION_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.cache_duration_ms = cache_duration_ms
        self._clock = clock

    def now(self) -> int:
        return self._clock()

    def age_ms(self, last_update: Optional[int]) -> Optional[int]:
        if not last_update:
            return None
        return self._clock() - last_update

    def is_stale(self, last_update: Optional[int]) -> bool:
        """A missing marker is stale; an age equal to the duration is still fresh."""
        age = self.age_ms(last_update)
        if age is None:
            return True
        return age > self.cache_duration_ms
