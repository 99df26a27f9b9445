# geofallback/api/routers/geolocate.py
from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends

from geofallback.api.deps import get_location_cache
from geofallback.core.exceptions import CacheMissError
from geofallback.schemas.common import ErrorResponse
from geofallback.schemas.geolocate import (
    CountryResponse,
    GeolocateRequest,
    GeolocateResponse,
    Location,
)
from geofallback.services.location_cache import LOCATION_KEY, CacheEntry, LocationCache

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["geolocation"])

_RequestBody = Annotated[GeolocateRequest | None, Body()]


def _cached_location(cache: LocationCache) -> CacheEntry:
    entry = cache.get(LOCATION_KEY)
    if entry is None:
        logger.info("location_cache_miss")
        raise CacheMissError()
    logger.info("location_cache_hit", country_code=entry.country_code)
    return entry


@router.post(
    "/geolocate",
    response_model=GeolocateResponse,
    summary="Locate this host",
    description="Approximate position from the cached IP lookup. Radio data in the body is ignored.",
    responses={
        400: {"model": ErrorResponse, "description": "malformed request body"},
        404: {"model": ErrorResponse, "description": "no fresh location cached"},
    },
)
async def geolocate(
    body: _RequestBody = None,
    cache: LocationCache = Depends(get_location_cache),
):
    entry = _cached_location(cache)
    return GeolocateResponse(location=Location(lat=entry.latitude, lng=entry.longitude))


@router.post(
    "/country",
    response_model=CountryResponse,
    summary="Country of this host",
    responses={
        400: {"model": ErrorResponse, "description": "malformed request body"},
        404: {"model": ErrorResponse, "description": "no fresh location cached"},
    },
)
async def country(
    body: _RequestBody = None,
    cache: LocationCache = Depends(get_location_cache),
):
    entry = _cached_location(cache)
    return CountryResponse(country_code=entry.country_code, country_name=entry.country_name)
