"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docsite import __version__
from docsite.config import Settings
from docsite.content.schemas import ErrorResponse
from docsite.errors import DocsiteError
from docsite.meta.cache import TTLCache
from docsite.meta.video import VideoMetaResolver
from docsite.middleware.cors import configure_cors
from docsite.middleware.logging import RequestLoggingMiddleware
from docsite.routes import content, health, meta

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Opens the shared outbound HTTP client on startup unless one was
    provided, and closes the client it opened on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "api_startup",
        host=settings.host,
        port=settings.port,
        content_root=str(settings.content_root),
    )

    owned_client: httpx.AsyncClient | None = None
    if app.state.http_client is None:
        owned_client = httpx.AsyncClient(timeout=settings.http_timeout)
        app.state.http_client = owned_client

    try:
        yield
    finally:
        if owned_client is not None:
            await owned_client.aclose()
            app.state.http_client = None
        logger.info("api_shutdown")


async def handle_docsite_error(request: Request, exc: DocsiteError) -> JSONResponse:
    """Translate a DocsiteError into its status code and error body.

    Args:
        request: Request that failed.
        exc: The raised error.

    Returns:
        JSON error response.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "request_failed",
        path=request.url.path,
        status=exc.status_code,
        error=exc.message,
        detail=exc.detail,
        error_type=type(exc).__name__,
    )

    settings: Settings = request.app.state.settings
    body = ErrorResponse(
        error=exc.message,
        detail=exc.detail if settings.debug else None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Report malformed query parameters with the standard error body.

    Args:
        request: Request that failed validation.
        exc: The RequestValidationError raised by FastAPI.

    Returns:
        400 JSON error response.
    """
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in errors]
    logger.warning("request_invalid", path=request.url.path, fields=fields)
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid request parameters").model_dump(
            exclude_none=True
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log an uncaught exception and return a generic 500 body."""
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


def create_app(
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.
        http_client: Outbound HTTP client. Opened in the lifespan if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Docsite Content API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.http_client = http_client
    app.state.video_resolver = VideoMetaResolver(
        api_url=settings.video_api_url,
        user_agent=settings.user_agent,
        cache=TTLCache(settings.video_cache_ttl, max_entries=settings.video_cache_size),
    )

    configure_cors(app, settings.cors_origins)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(DocsiteError, handle_docsite_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(content.router, prefix="/api/v1")
    app.include_router(meta.router, prefix="/api/v1")

    return app
