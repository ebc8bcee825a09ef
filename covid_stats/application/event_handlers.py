"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covid_stats.domain.events import (
        CountriesRefreshed,
        HistoricalRefreshed,
        CacheFallbackUsed,
        ConnectivityChanged,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs cache writes and fallbacks for the audit trail."""
    
    def handle_countries_refreshed(self, event: CountriesRefreshed) -> None:
        logger.info(f"[AUDIT] Country list refreshed: {event.country_count} countries at {event.updated_at_ms}")
    
    def handle_historical_refreshed(self, event: HistoricalRefreshed) -> None:
        logger.info(f"[AUDIT] Historical data refreshed: {event.country} (lastdays={event.days})")
    
    def handle_cache_fallback(self, event: CacheFallbackUsed) -> None:
        logger.info(f"[CACHE] Serving {event.resource} from cache: {event.reason}")


class NetworkStatusHandler:
    """Reports connectivity flips."""
    
    def handle_connectivity_changed(self, event: ConnectivityChanged) -> None:
        if event.online:
            logger.info("[NETWORK] Connectivity restored")
        else:
            logger.warning("[NETWORK] Connectivity lost, remote fetches will be skipped")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from covid_stats.domain.events import (
        event_publisher,
        CountriesRefreshed,
        HistoricalRefreshed,
        CacheFallbackUsed,
        ConnectivityChanged,
    )
    
    audit = AuditLogHandler()
    network = NetworkStatusHandler()
    
    event_publisher.subscribe(CountriesRefreshed, audit.handle_countries_refreshed)
    event_publisher.subscribe(HistoricalRefreshed, audit.handle_historical_refreshed)
    event_publisher.subscribe(CacheFallbackUsed, audit.handle_cache_fallback)
    event_publisher.subscribe(ConnectivityChanged, network.handle_connectivity_changed)
