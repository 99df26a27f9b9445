"""Shared test doubles."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from geofallback.services.location_cache import CacheEntry

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Manually advanced replacement for datetime.now(UTC)."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingSleep:
    """Async sleep stand-in that records delays and returns immediately."""

    def __init__(self, clock: FakeClock | None = None):
        self.delays: list[float] = []
        self._clock = clock

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self._clock is not None:
            self._clock.advance(delay)


def make_entry(
    country_code: str = "CH",
    country_name: str = "Switzerland",
    coordinates: tuple[float, float] = (47.0, 8.0),
    fetched_at: datetime = T0,
) -> CacheEntry:
    return CacheEntry(
        country_code=country_code,
        country_name=country_name,
        coordinates=coordinates,
        fetched_at=fetched_at,
    )
