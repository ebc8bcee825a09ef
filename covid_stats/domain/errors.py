"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class ValidationError(DomainError):
    """Invalid input or state."""


class StorageError(DomainError):
    """Key-value backend could not complete a read or write."""


class RemoteProviderError(DomainError):
    """Remote data provider call failed (transport, timeout, non-2xx)."""

