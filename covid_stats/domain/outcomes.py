"""Tagged results returned by every data-service operation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")

MESSAGE_OFFLINE = "Using cached data (offline or API unavailable)"
MESSAGE_FAULT = "Using cached data due to error"


def _serialize(data: Any) -> Any:
    if data is None:
        return None
    if isinstance(data, list):
        return [_serialize(item) for item in data]
    if hasattr(data, "to_payload"):
        return data.to_payload()
    return data


@dataclass(frozen=True)
class Fresh(Generic[T]):
    """Data just fetched from the remote provider."""

    data: T
    success = True
    from_cache = False

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "data": _serialize(self.data), "fromCache": False}


@dataclass(frozen=True)
class Cached(Generic[T]):
    """Data served from the local cache, with an optional reason."""

    data: T
    message: Optional[str] = None
    success = True
    from_cache = True

    def to_dict(self) -> Dict[str, Any]:
        body = {"success": True, "data": _serialize(self.data), "fromCache": True}
        if self.message is not None:
            body["message"] = self.message
        return body


@dataclass(frozen=True)
class Unavailable(Generic[T]):
    """Neither remote nor cache produced data; ``data`` is the empty default."""

    error: str
    data: T = None
    success = False
    from_cache = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "data": _serialize(self.data),
            "fromCache": False,
            "error": self.error,
        }


Outcome = Union[Fresh[T], Cached[T], Unavailable[T]]
