from __future__ import annotations

from collections.abc import Callable

from fastapi import Request, Response


async def security_headers_middleware(request: Request, call_next: Callable) -> Response:
    """Attach basic security headers to every response.

    - X-Content-Type-Options: nosniff
    - Referrer-Policy: no-referrer
    - Cache-Control: no-store (location answers change with every refresh)
    """
    response = await call_next(request)
    headers = response.headers
    headers.setdefault("X-Content-Type-Options", "nosniff")
    headers.setdefault("Referrer-Policy", "no-referrer")
    headers.setdefault("Cache-Control", "no-store")
    return response
