"""Single-shot lookup against the ip-api.com geolocation endpoint."""

from __future__ import annotations

import math
from typing import Any, NamedTuple

import httpx
import structlog

from geofallback.core.exceptions import FetchError

logger = structlog.get_logger(__name__)

_USER_AGENT = "GeoFallback/0.1"
DEFAULT_TIMEOUT = 10.0


class LocationFix(NamedTuple):
    country_code: str
    country_name: str
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Zero or non-finite coordinates mean "no fix"."""
        return (
            len(self.country_code) == 2
            and all(math.isfinite(c) and c != 0.0 for c in (self.latitude, self.longitude))
        )


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):  # noqa: UP038
        return 0.0
    try:
        value = float(value)
    except OverflowError:
        return 0.0
    # 1e999 parses to inf
    return value if math.isfinite(value) else 0.0


def parse_location(payload: Any) -> LocationFix:
    """Normalize an ip-api.com body; missing or odd fields fall back to defaults.

    {"status":"success","country":"Switzerland","countryCode":"CH","lat":47.0,"lon":8.0}
    """
    if not isinstance(payload, dict):
        payload = {}
    return LocationFix(
        country_code=_as_str(payload.get("countryCode")),
        country_name=_as_str(payload.get("country")),
        latitude=_as_float(payload.get("lat")),
        longitude=_as_float(payload.get("lon")),
    )


async def fetch_location(
    client: httpx.AsyncClient, url: str, *, timeout: float = DEFAULT_TIMEOUT
) -> LocationFix:
    """Execute one GET and parse it, raising FetchError on transport/status failure."""

    logger.debug("location_fetch_start", url=url)
    try:
        response = await client.get(url, headers={"User-Agent": _USER_AGENT}, timeout=timeout)
    except httpx.HTTPError as exc:
        raise FetchError(f"request failed: {exc!r}", url=url) from exc

    if not response.is_success:
        raise FetchError(
            f"unexpected status {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError:
        logger.warning("location_fetch_bad_json", url=url)
        payload = None
    return parse_location(payload)
