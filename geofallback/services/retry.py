"""Bounded retries with exponential backoff around the upstream lookup."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from geofallback.core.exceptions import ExhaustedRetriesError, FetchError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_BACKOFF_FACTOR = 2.0


def backoff_delay(attempt: int, initial_interval: float, factor: float = DEFAULT_BACKOFF_FACTOR) -> float:
    """Return the wait before retry number ``attempt`` (1-based).

    Grows geometrically with no jitter and no upper bound.
    """
    if attempt < 1:
        raise ValueError("attempt is 1-based")
    return initial_interval * factor ** (attempt - 1)


async def fetch_with_retry(
    fetch: Callable[[str], Awaitable[T]],
    url: str,
    max_retries: int,
    initial_interval: float,
    *,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Call ``fetch(url)`` until it succeeds or ``max_retries + 1`` attempts fail.

    Only FetchError is retried; anything else propagates immediately.

    Raises:
        ExhaustedRetriesError: carrying (and chained from) the last FetchError.
    """
    retries = 0
    while True:
        try:
            result = await fetch(url)
        except FetchError as exc:
            retries += 1
            if retries > max_retries:
                logger.error("location_fetch_exhausted", url=url, attempts=retries, error=str(exc))
                raise ExhaustedRetriesError(retries, exc) from exc
            delay = backoff_delay(retries, initial_interval, backoff_factor)
            logger.warning(
                "location_fetch_retry",
                url=url,
                attempt=retries,
                max_retries=max_retries,
                delay_seconds=delay,
                error=str(exc),
            )
            await sleep(delay)
        else:
            logger.info("location_fetch_ok", url=url, attempts=retries + 1)
            return result
