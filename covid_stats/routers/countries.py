"""
Country statistics endpoints.

Each endpoint returns the engine's outcome body
(``success``, ``data``, ``fromCache``, ``message``, ``error``).
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from covid_stats.dependencies import get_data_service
from covid_stats.domain.errors import ValidationError
from covid_stats.domain.models import sample_points, search_by_name, sort_by_cases
from covid_stats.domain.outcomes import Unavailable
from covid_stats.schemas.api_schemas import ClearCacheResponse, OutcomeResponse
from covid_stats.services.covid_data_service import CovidDataService

router = APIRouter()

SORT_OPTIONS = ("cases",)


def _validate_days(days: str) -> str:
    if days == "all" or (days.isdigit() and int(days) > 0):
        return days
    raise ValidationError(f"days must be 'all' or a positive integer, got {days!r}")


def _validate_sort(sort: Optional[str]) -> Optional[str]:
    if sort is None or sort in SORT_OPTIONS:
        return sort
    raise ValidationError(f"Unsupported sort {sort!r}; expected one of {', '.join(SORT_OPTIONS)}")


def _list_response(outcome, search: Optional[str], sort: Optional[str]) -> JSONResponse:
    body = outcome.to_dict()
    if outcome.success:
        records = outcome.data
        if search:
            records = search_by_name(records, search)
        if sort == "cases":
            records = sort_by_cases(records)
        body["data"] = [record.to_payload() for record in records]
    return JSONResponse(content=body)


@router.get("/countries", response_model=OutcomeResponse)
async def list_countries(
    force_refresh: bool = False,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    service: CovidDataService = Depends(get_data_service),
):
    """
    All countries, from cache while the country list is fresh.
    Optional case-insensitive name search and ordering by cases.
    """
    sort = _validate_sort(sort)
    outcome = await service.fetch_all_countries(force_refresh=force_refresh)
    return _list_response(outcome, search, sort)


@router.post("/countries/refresh", response_model=OutcomeResponse)
async def refresh_countries(
    search: Optional[str] = None,
    sort: Optional[str] = None,
    service: CovidDataService = Depends(get_data_service),
):
    """Refetch the country list regardless of cache age."""
    sort = _validate_sort(sort)
    outcome = await service.refresh_data()
    return _list_response(outcome, search, sort)


@router.get("/countries/{country_name}", response_model=OutcomeResponse)
async def country_details(
    country_name: str,
    service: CovidDataService = Depends(get_data_service),
):
    """Single country with derived death, recovery and active rates."""
    outcome = await service.fetch_country_details(country_name)
    body = outcome.to_dict()
    if isinstance(outcome, Unavailable):
        return JSONResponse(status_code=404, content=body)
    body["data"].update(outcome.data.rates())
    return JSONResponse(content=body)


@router.get("/countries/{country_name}/historical", response_model=OutcomeResponse)
async def country_historical(
    country_name: str,
    days: str = "all",
    max_points: Optional[int] = Query(None, ge=1, description="Down-sample chart points to at most this many"),
    service: CovidDataService = Depends(get_data_service),
):
    """Historical series with chart points (source order) and the latest entry."""
    outcome = await service.fetch_historical_data(country_name, _validate_days(days))
    body = outcome.to_dict()
    if isinstance(outcome, Unavailable):
        return JSONResponse(status_code=404, content=body)
    series = outcome.data
    points = series.chart_points()
    if max_points:
        points = sample_points(points, max_points)
    latest = series.latest()
    body["data"]["chart"] = [point.to_payload() for point in points]
    body["data"]["latest"] = latest.to_payload() if latest else None
    return JSONResponse(content=body)


@router.delete("/cache", response_model=ClearCacheResponse)
async def clear_cache(service: CovidDataService = Depends(get_data_service)):
    """Drop every cached entry, including the freshness marker."""
    return ClearCacheResponse(success=service.clear_cache())


@router.delete("/countries/{country_name}/historical", response_model=ClearCacheResponse)
async def clear_country_historical(
    country_name: str,
    service: CovidDataService = Depends(get_data_service),
):
    """Evict one country's cached historical series (exact, case-sensitive name)."""
    return ClearCacheResponse(success=service.clear_historical(country_name))
