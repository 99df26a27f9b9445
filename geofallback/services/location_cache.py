"""In-memory location cache with a single process-wide TTL."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog

from geofallback.utils.rwlock import ReadWriteLock

logger = structlog.get_logger(__name__)

LOCATION_KEY = "location"


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Last known location fix.

    Frozen so a reader holding an entry can never observe it change; a write
    replaces the whole entry instead.
    """

    country_code: str
    country_name: str
    coordinates: tuple[float, float]  # (latitude, longitude)
    fetched_at: datetime

    @property
    def latitude(self) -> float:
        return self.coordinates[0]

    @property
    def longitude(self) -> float:
        return self.coordinates[1]


class LocationCache:
    """Key -> CacheEntry mapping whose reads honour a fixed TTL.

    Entries whose age is >= ttl are logically expired: ``get`` treats them as
    absent and ``sweep`` physically removes them. The lock only ever covers
    the dict access, never I/O.
    """

    def __init__(
        self,
        ttl: timedelta | float,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not isinstance(ttl, timedelta):
            ttl = timedelta(seconds=ttl)
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def now(self) -> datetime:
        return self._clock()

    def _is_expired(self, entry: CacheEntry, now: datetime) -> bool:
        return now - entry.fetched_at >= self._ttl

    def get(self, key: str) -> CacheEntry | None:
        now = self._clock()
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is None or self._is_expired(entry, now):
            return None
        return entry

    def insert(self, key: str, entry: CacheEntry) -> None:
        with self._lock.write():
            self._entries[key] = entry

    def sweep(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        now = self._clock()
        with self._lock.write():
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("location_cache_swept", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
