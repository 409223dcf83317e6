"""API middleware for the storefront catalog.

Every response carries an ``X-Request-ID`` and an ``X-Response-Time-Ms``
header, and every log line emitted while serving a request is tagged with
the request ID. Failures not mapped by an exception handler become the
standard error body.
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.api.schemas import ErrorResponse

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Build the standard error body for a request.

    Args:
        request: Request being answered.
        status_code: HTTP status code.
        error_code: Machine-readable error code.
        message: Human-readable message.
        details: Optional field-level details.

    Returns:
        JSONResponse with an ErrorResponse body.
    """
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details or [],
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlates requests, responses and log lines.

    Reuses the caller's X-Request-ID when present, otherwise generates one.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response: Response | None = None
            try:
                response = await call_next(request)
            finally:
                elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
                status_code = getattr(response, "status_code", 500)
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_ms=elapsed_ms,
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = str(elapsed_ms)
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions escaping the routers into a 500 error body."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
            )
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
            )


def setup_middleware(app: FastAPI) -> None:
    """Install storefront middleware.

    The request context middleware is added last so it wraps the error
    handler and error bodies still carry the request ID.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestContextMiddleware)
