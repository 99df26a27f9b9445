# tests/conftest.py
import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Never reach the real upstream from tests, even if lifespan runs
os.environ["REFRESH_ENABLED"] = "0"
os.environ.setdefault("SENTRY_DSN", "")

from geofallback.core.config import Settings  # noqa: E402 (import after env tweaks)
from geofallback.logging import setup_logging  # noqa: E402
from geofallback.main import create_app  # noqa: E402
from geofallback.services.location_cache import LocationCache  # noqa: E402
from tests.helpers import FakeClock  # noqa: E402

setup_logging()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ttl_cache=5,
        retry_max=2,
        retry_initial_interval=0.0,
        refresh_enabled=False,
    )


@pytest.fixture
def cache(clock: FakeClock, settings: Settings) -> LocationCache:
    return LocationCache(settings.ttl_cache, clock=clock)


@pytest.fixture
def app(settings: Settings, cache: LocationCache) -> FastAPI:
    application = create_app(settings)
    # Swap in the clock-controlled cache; handlers resolve it from app.state
    application.state.location_cache = cache
    return application


@pytest_asyncio.fixture
async def app_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
