"""Network reachability probes with change notification."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

import httpx

from covid_stats.domain.events import ConnectivityChanged, event_publisher

logger = logging.getLogger(__name__)

Listener = Callable[[bool], None]


class ConnectivityProbe:
    """Base probe: remembers the last observed status and notifies on flips.

    ``None`` means no status has been observed yet; the first observation
    counts as a change.
    """

    def __init__(self, initial: Optional[bool] = True) -> None:
        self._online = initial
        self._listeners: List[Listener] = []

    @property
    def last_known(self) -> Optional[bool]:
        return self._online

    def on_change(self, callback: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _update(self, online: bool) -> None:
        if online == self._online:
            return
        self._online = online
        event_publisher.publish(ConnectivityChanged(event_id="", timestamp=None, aggregate_id="network", online=online))
        for listener in list(self._listeners):
            try:
                listener(online)
            except Exception:
                logger.exception("Connectivity listener failed")

    async def current_status(self) -> bool:
        raise NotImplementedError


class StaticConnectivityProbe(ConnectivityProbe):
    """Reports a fixed status that can be flipped by hand (forced offline mode, tests)."""

    def set_status(self, online: bool) -> None:
        self._update(online)

    async def current_status(self) -> bool:
        return self._online


class HttpConnectivityProbe(ConnectivityProbe):
    """Checks reachability with a HEAD request against a known URL."""

    def __init__(
        self,
        check_url: str,
        timeout: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(initial=None)
        self.check_url = check_url
        self.timeout = timeout
        self._transport = transport

    async def current_status(self) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                await client.head(self.check_url)
            online = True
        except httpx.HTTPError as e:
            logger.debug(f"Connectivity check against {self.check_url} failed: {e}")
            online = False
        self._update(online)
        return online
