"""
FastAPI application entry point for the Lessons API.

This module provides the main FastAPI application with:
- Item, upload, notification and token-protected routers
- Domain exception to HTTP response mapping
- Request/response logging with correlation IDs
- Prometheus metrics
- CORS and GZip middleware
- Health endpoint
- Startup and shutdown logging
"""

import time
import uuid
import structlog
import uvicorn
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from prometheus_client import CONTENT_TYPE_LATEST

from lessons_api.config import get_settings, Settings
from lessons_api.dependencies import get_item_repository, get_settings_dependency
from lessons_api.exceptions import LessonsAPIError
from lessons_api.metrics import http_metrics
from lessons_api.repositories.item_repo import ItemRepository
from lessons_api.routers import items, notifications, secure, uploads
from shared.logging import bind_context, clear_context, configure_logging
from shared.metrics import get_metrics_handler
from shared.models import HealthResponse, HealthStatus

logger = structlog.get_logger(__name__)

settings: Settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_logs=settings.log_format == "json",
    service_name=settings.app_name,
    environment=settings.environment,
)

# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Creates the upload directory on startup and logs both transitions.
    The in-memory item store needs no setup or teardown.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    logger.info(
        "application_started",
        app_name=settings.app_name,
        upload_dir=settings.upload_dir,
        api_prefix=settings.api_prefix or "/"
    )

    try:
        yield
    finally:
        logger.info("application_shutdown_complete")

# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Worked examples of a FastAPI service: routing, validation, "
        "dependency injection, file uploads, background tasks and "
        "custom exception handling over an in-memory item store."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    debug=settings.debug,
)

# ============================================================================
# Middleware Configuration
# ============================================================================

if settings.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

app.add_middleware(GZipMiddleware, minimum_size=1000)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, correlation IDs and metrics."""

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        clear_context()
        bind_context(correlation_id=correlation_id)

        http_metrics.requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip
        )

        try:
            response = await call_next(request)

            duration = time.perf_counter() - start_time
            endpoint = self._route_template(request)

            http_metrics.requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            http_metrics.request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s"
            )

            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            raise

        finally:
            http_metrics.requests_in_progress.labels(method=method).dec()
            clear_context()

    @staticmethod
    def _route_template(request: Request) -> str:
        """Matched route path (e.g. /items/{item_id}) to keep label cardinality bounded."""
        route = request.scope.get("route")
        return getattr(route, "path", "unmatched")


app.add_middleware(RequestLoggingMiddleware)

# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(LessonsAPIError)
async def lessons_api_exception_handler(request: Request, exc: LessonsAPIError):
    """Map domain exceptions to their HTTP status and error code."""
    logger.warning(
        "domain_error",
        path=request.url.path,
        status_code=exc.status_code,
        error_code=exc.error_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
        headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=errors
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )

# ============================================================================
# Root, Health and Metrics Endpoints
# ============================================================================

@app.get("/", tags=["Health"])
async def root() -> dict:
    """Landing route pointing at the interactive docs."""
    return {"message": f"Welcome to {settings.app_name}", "docs": "/docs"}


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check(
    repo: ItemRepository = Depends(get_item_repository)
) -> HealthResponse:
    """
    Health check endpoint.

    Returns basic health status and the size of the in-memory store.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        items_stored=repo.count()
    )


_metrics_handler = get_metrics_handler()


@app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
async def metrics(
    app_settings: Settings = Depends(get_settings_dependency)
) -> Response:
    """
    Prometheus metrics endpoint.

    Exposes application metrics in Prometheus format for scraping.
    """
    if not app_settings.metrics_enabled:
        raise StarletteHTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    return Response(
        content=_metrics_handler(),
        media_type=CONTENT_TYPE_LATEST
    )

# ============================================================================
# API Router Registration
# ============================================================================

app.include_router(items.router, prefix=settings.api_prefix)
app.include_router(uploads.router, prefix=settings.api_prefix)
app.include_router(notifications.router, prefix=settings.api_prefix)
app.include_router(secure.router, prefix=settings.api_prefix)

logger.debug("routers_registered", api_prefix=settings.api_prefix or "/")

# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "lessons_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
