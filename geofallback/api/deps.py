"""API dependency helpers."""

from fastapi import Request

from geofallback.services.location_cache import LocationCache

__all__ = ["get_location_cache"]


def get_location_cache(request: Request) -> LocationCache:
    """Shared cache created once per application in create_app."""
    return request.app.state.location_cache
