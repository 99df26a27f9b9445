from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip(request: Request) -> str:
    return (request.client.host if request.client else None) or "-"


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and emit one structured access log line per request.

    The id (inbound header or a fresh UUID4) is bound to structlog contextvars
    so cache hit/miss logs from the handlers carry it too.
    """
    logger = structlog.get_logger(__name__)

    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        sentry_sdk.set_tag("request_id", rid)
    except Exception:
        # Never let Sentry instrumentation break request processing
        pass

    start_ns = time.perf_counter_ns()
    fields = {"path": request.url.path, "method": request.method, "client_ip": _client_ip(request)}
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000.0
        logger.error(
            "http_request", status=500, duration_ms=round(duration_ms, 3), exc_info=True, **fields
        )
        structlog.contextvars.clear_contextvars()
        raise

    duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000.0
    logger.info(
        "http_request", status=response.status_code, duration_ms=round(duration_ms, 3), **fields
    )
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response
