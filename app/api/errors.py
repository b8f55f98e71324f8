"""Central translation of failures into the error envelope.

This is the only place that builds ``ErrorResponse`` bodies.
"""
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException, ErrorKind
from app.core.logging import get_correlation_id, get_logger
from app.schemas.base_schema import ErrorResponse

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def status_for(kind: ErrorKind) -> int:
    match kind:
        case ErrorKind.NOT_FOUND:
            return 404
        case ErrorKind.VALIDATION:
            return 400
        case ErrorKind.CONFLICT:
            return 409
        case ErrorKind.MALFORMED_FILTER | ErrorKind.INVALID_RESPONSE:
            return 502
        case ErrorKind.UNAUTHORIZED:
            return 401
        case ErrorKind.FORBIDDEN:
            return 403
        case _:
            return 500


def _trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None) or get_correlation_id() or None


def error_response(request: Request, status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)


def _unexpected(request: Request) -> JSONResponse:
    trace_id = _trace_id(request)
    message = f"{GENERIC_ERROR_MESSAGE} (trace id: {trace_id})" if trace_id else GENERIC_ERROR_MESSAGE
    return error_response(request, 500, message)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg')}")
    return "; ".join(parts)


def register_exception_handlers(application: FastAPI) -> None:

    @application.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        status_code = status_for(exc.kind)
        if exc.kind == ErrorKind.UNEXPECTED:
            logger.error(
                "%s [trace_id=%s]: %s (%s)",
                exc.kind.value, _trace_id(request), exc.message, exc.detail,
                extra={"path": request.url.path, "status": status_code},
            )
            return _unexpected(request)

        if exc.kind in (ErrorKind.MALFORMED_FILTER, ErrorKind.INVALID_RESPONSE):
            logger.warning("Semantic search failed: %s", exc.message, extra={"path": request.url.path})

        headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHORIZED else None
        return error_response(request, status_code, exc.message, headers)

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(request, status_for(ErrorKind.VALIDATION), _format_validation_errors(exc))

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception [trace_id=%s]", _trace_id(request), exc_info=exc)
        return _unexpected(request)
