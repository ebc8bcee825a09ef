"""
Health check endpoints for the API.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime

from covid_stats.config import settings
from covid_stats.dependencies import get_connectivity_probe, get_data_service
from covid_stats.infrastructure.connectivity import ConnectivityProbe
from covid_stats.schemas.api_schemas import CacheStatusResponse
from covid_stats.services.covid_data_service import CovidDataService

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/cache")
async def cache_health(
    service: CovidDataService = Depends(get_data_service),
    probe: ConnectivityProbe = Depends(get_connectivity_probe),
) -> Dict[str, Any]:
    """
    Check cache health.
    Reports the freshness marker, whether the country list is stale,
    and the last observed connectivity state.
    """
    try:
        status = CacheStatusResponse(**service.cache_status())
        
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "storage_type": settings.STORAGE_TYPE,
            "online": probe.last_known,
            "cache": status.model_dump(),
        }
        
    except Exception as e:
        return {
            "status": "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }
