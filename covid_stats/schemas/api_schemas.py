"""
API Request/Response Schemas using Pydantic.

Structure of HTTP responses for the COVID stats API.
"""
from pydantic import BaseModel, Field
from typing import Any, Optional

# Outcome schemas
class OutcomeResponse(BaseModel):
    success: bool = Field(..., description="Whether remote or cache produced data")
    data: Any = Field(None, description="Country list, country record or historical series")
    fromCache: bool = Field(False, description="True when data was served from the local cache")
    message: Optional[str] = Field(None, description="Why cached data was served, when applicable")
    error: Optional[str] = Field(None, description="Failure description when success is false")

# Cache schemas
class CacheStatusResponse(BaseModel):
    last_update: Optional[int] = Field(None, description="Epoch ms of the last remote country-list fetch")
    age_ms: Optional[int] = Field(None, description="Age of the country-list cache")
    stale: bool = Field(..., description="Whether the next list fetch will go remote")
    cache_duration_ms: int = Field(..., description="Freshness window")

class ClearCacheResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the store was cleared")
