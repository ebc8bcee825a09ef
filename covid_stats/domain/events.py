"""Domain events for decoupled side effects such as audit logging."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str
    
    def __post_init__(self):
        if not hasattr(self, 'event_id') or not self.event_id:
            object.__setattr__(self, 'event_id', str(uuid4()))
        if not hasattr(self, 'timestamp') or not self.timestamp:
            object.__setattr__(self, 'timestamp', datetime.now())


@dataclass
class CountriesRefreshed(DomainEvent):
    """Raised when the country list was fetched remotely and persisted."""
    country_count: int
    updated_at_ms: int


@dataclass
class HistoricalRefreshed(DomainEvent):
    """Raised when a country's historical series was fetched remotely and persisted."""
    country: str
    days: str


@dataclass
class CacheFallbackUsed(DomainEvent):
    """Raised when an operation answered from cache because remote was skipped or failed."""
    resource: str
    reason: str


@dataclass
class ConnectivityChanged(DomainEvent):
    """Raised when the connectivity probe observes a status flip."""
    online: bool


class DomainEventPublisher:
    """Singleton publisher for domain events."""
    
    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance
    
    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)
    
    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        event_type = type(event)
        if event_type in self._subscribers:
            for handler in self._subscribers[event_type]:
                try:
                    handler(event)
                except Exception:
                    # Log error but don't fail the main operation
                    logger.exception(f"Event handler error for {event_type.__name__}")
    
    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
