"""Background task that keeps the location cache populated."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial

import httpx
import structlog

from geofallback.core.config import Settings
from geofallback.core.exceptions import ExhaustedRetriesError
from geofallback.services.location_cache import LOCATION_KEY, CacheEntry, LocationCache
from geofallback.services.retry import fetch_with_retry
from geofallback.services.upstream import LocationFix, fetch_location

logger = structlog.get_logger(__name__)

Fetch = Callable[[str], Awaitable[LocationFix]]


class LocationRefresher:
    """Sole writer of the location cache.

    Each cycle fetches (with retry), writes a valid fix, sleeps for the cache
    TTL and then sweeps expired entries. A failed cycle leaves the previous
    entry in place until it ages out.
    """

    def __init__(
        self,
        cache: LocationCache,
        settings: Settings,
        *,
        fetch: Fetch | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._cache = cache
        self._settings = settings
        self._fetch = fetch
        self._transport = transport
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fetch_with_retry(self, fetch: Fetch) -> LocationFix:
        s = self._settings
        return await fetch_with_retry(
            fetch,
            s.upstream_url,
            s.retry_max,
            s.retry_initial_interval,
            backoff_factor=s.retry_backoff_factor,
            sleep=self._sleep,
        )

    async def refresh_once(self) -> bool:
        """Run one fetch cycle; return True when a new entry was written."""
        try:
            if self._fetch is not None:
                fix = await self._fetch_with_retry(self._fetch)
            else:
                async with httpx.AsyncClient(transport=self._transport) as client:
                    fetch = partial(fetch_location, client, timeout=self._settings.upstream_timeout)
                    fix = await self._fetch_with_retry(fetch)
        except ExhaustedRetriesError as exc:
            logger.error(
                "location_refresh_failed",
                attempts=exc.attempts,
                error=str(exc.last_error),
                cached=self._cache.get(LOCATION_KEY) is not None,
            )
            return False

        logger.debug(
            "location_fetched",
            country_code=fix.country_code,
            latitude=fix.latitude,
            longitude=fix.longitude,
        )
        if not fix.is_valid():
            logger.warning("location_fix_invalid", country_code=fix.country_code)
            return False

        entry = CacheEntry(
            country_code=fix.country_code,
            country_name=fix.country_name,
            coordinates=(fix.latitude, fix.longitude),
            fetched_at=self._cache.now(),
        )
        self._cache.insert(LOCATION_KEY, entry)
        logger.info("location_refreshed", country_code=entry.country_code)
        return True

    async def run_forever(self) -> None:
        while True:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("location_refresh_crashed")
            await self._sleep(self._cache.ttl.total_seconds())
            self._cache.sweep()

    def start(self) -> asyncio.Task[None]:
        if self._task and not self._task.done():
            return self._task
        self._task = asyncio.create_task(self.run_forever(), name="location-refresher")
        logger.info("location_refresher_started", ttl_seconds=self._cache.ttl.total_seconds())
        return self._task

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("location_refresher_stopped")
        self._task = None
