from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from geofallback.core import exceptions as domain_exceptions
from geofallback.schemas.common import ErrorDetail, ErrorInfo, ErrorResponse

ERROR_DOMAIN = "geolocation"

_REASONS = {
    400: "parseError",
    404: "notFound",
    405: "methodNotAllowed",
    500: "internalError",
}


def error_body(code: int, message: str, *, reason: str | None = None) -> dict:
    """Build the {"error": {"errors": [...], "code", "message"}} envelope."""
    reason = reason or _REASONS.get(code, "error")
    payload = ErrorResponse(
        error=ErrorDetail(
            errors=[ErrorInfo(domain=ERROR_DOMAIN, reason=reason, message=message)],
            code=code,
            message=message,
        )
    )
    return payload.model_dump()


def error_response(code: int, message: str, *, reason: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=code, content=error_body(code, message, reason=reason))


def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Normalize routing errors (unknown path, wrong method) to the same envelope
    message = exc.detail if isinstance(exc.detail, str) else "Error"
    return error_response(exc.status_code, message)


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Parse Error")


def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    # Hide internal details by default
    return error_response(500, "Internal Server Error")


def _domain_error_handler(status_code: int, default_message: str):
    def _handler(_: Request, exc: domain_exceptions.DomainError) -> JSONResponse:
        return error_response(status_code, str(exc) or default_message)

    return _handler


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(
        domain_exceptions.NotFoundError, _domain_error_handler(404, "Not found")
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
