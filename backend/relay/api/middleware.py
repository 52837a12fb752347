"""
FastAPI middleware and exception handlers.
"""
from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from relay.config import Settings
from relay.errors import ProviderError, RelayError

logger = structlog.get_logger(__name__)


def get_cors_headers(request: Request, settings: Settings) -> dict[str, str]:
    """Get CORS headers for the given request."""
    origin = request.headers.get("origin")
    headers: dict[str, str] = {}
    if not origin:
        return headers
    if "*" in settings.CORS_ALLOW_ORIGINS and not settings.CORS_ALLOW_CREDENTIALS:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in settings.CORS_ALLOW_ORIGINS or "*" in settings.CORS_ALLOW_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
        if settings.CORS_ALLOW_CREDENTIALS:
            headers["Access-Control-Allow-Credentials"] = "true"
    return headers


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Setup CORS middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _create_error_response(
    request: Request,
    settings: Settings,
    status_code: int,
    error: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create an ``{"error": ...}`` response with CORS headers.

    Args:
        request: FastAPI request object
        settings: Active settings (for the CORS policy)
        status_code: HTTP status code
        error: Error message
        headers: Additional headers to include

    Returns:
        JSONResponse with the error message and CORS headers
    """
    response_headers = get_cors_headers(request, settings)
    if headers:
        response_headers.update(headers)

    return JSONResponse(
        status_code=status_code,
        content={"error": error},
        headers=response_headers,
    )


async def _body_size(request: Request) -> int:
    """Declared ``Content-Length``, or the length of the body actually sent.

    Chunked uploads carry no length header; their body is read (and cached on
    the request for the route) so it can be measured.
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit():
        return int(content_length)
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return 0
    return len(await request.body())


def setup_body_limit(app: FastAPI, settings: Settings) -> None:
    """Reject request bodies larger than MAX_BODY_BYTES with 413."""

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        size = await _body_size(request)
        if size > settings.MAX_BODY_BYTES:
            logger.warning(
                "request_body_too_large",
                path=request.url.path,
                size=size,
                chunked="content-length" not in request.headers,
                limit=settings.MAX_BODY_BYTES,
            )
            return _create_error_response(
                request,
                settings,
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                error="request entity too large",
            )
        return await call_next(request)


def setup_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Setup exception handlers."""

    @app.exception_handler(RelayError)
    async def relay_exception_handler(request: Request, exc: RelayError):
        """Render relay errors with their own status; provider status is logged only."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "relay_request_failed",
            path=request.url.path,
            error=exc.message,
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            upstream_status=exc.upstream_status if isinstance(exc, ProviderError) else None,
        )
        return _create_error_response(
            request,
            settings,
            status_code=exc.status_code,
            error=exc.message,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed JSON or wrongly typed fields are caller errors."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "invalid request body")
        error = f"{location}: {message}" if location else message
        logger.warning("request_validation_failed", path=request.url.path, error=error)
        return _create_error_response(
            request,
            settings,
            status_code=status.HTTP_400_BAD_REQUEST,
            error=error,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions and ensure CORS headers are included."""
        headers = dict(exc.headers) if exc.headers else None
        return _create_error_response(
            request,
            settings,
            status_code=exc.status_code,
            error=str(exc.detail),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all exceptions and ensure CORS headers are included."""
        logger.exception("unhandled_exception", path=request.url.path, exc_info=exc)
        return _create_error_response(
            request,
            settings,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Internal Server Error",
        )
