import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from geofallback.api import errors
from geofallback.api.routers.geolocate import router as geolocate_router
from geofallback.api.routers.healthz import router as healthz_router
from geofallback.api.routers.readyz import router as readyz_router
from geofallback.core.config import Settings
from geofallback.logging import setup_logging
from geofallback.middleware.request_id import request_id_middleware
from geofallback.middleware.security_headers import security_headers_middleware
from geofallback.services.location_cache import LocationCache
from geofallback.services.refresher import LocationRefresher


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    refresher: LocationRefresher = app.state.refresher
    if app.state.settings.refresh_enabled:
        refresher.start()
    try:
        yield
    finally:
        await refresher.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    # Initialize structured logging first
    setup_logging()
    settings = settings or Settings()
    env = os.getenv("APP_ENV", "dev")
    _init_sentry(env)

    app = FastAPI(title="Geo Fallback", version="0.1.0", lifespan=_lifespan)

    # One cache per process; the refresher writes it, handlers only read it
    cache = LocationCache(settings.ttl_cache)
    app.state.settings = settings
    app.state.location_cache = cache
    app.state.refresher = LocationRefresher(cache, settings)

    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "").split(",") if o.strip()]
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(geolocate_router)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    structlog.get_logger(__name__).info(
        "app_startup",
        env=env,
        ttl_seconds=settings.ttl_cache,
        upstream_url=settings.upstream_url,
        refresh_enabled=settings.refresh_enabled,
    )
    return app
