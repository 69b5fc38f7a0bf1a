"""
FastAPI dependency injection for settings, storage, services and auth.

Provides injectable dependencies for:
- Application settings
- The shared in-memory item repository
- Upload, notification and auth services
- Bearer token verification
- Pagination parameters

Tests replace any of these through ``app.dependency_overrides``.
"""

import structlog
from typing import Optional
from functools import lru_cache
from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from lessons_api.config import get_settings, Settings
from lessons_api.exceptions import AuthenticationError
from lessons_api.metrics import lesson_metrics
from lessons_api.repositories.item_repo import ItemRepository
from lessons_api.services.auth_service import AuthService
from lessons_api.services.notification_service import NotificationService
from lessons_api.services.upload_service import UploadService

logger = structlog.get_logger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


# ============================================================================
# SETTINGS
# ============================================================================


def get_settings_dependency() -> Settings:
    """
    Get application settings.

    Example:
        @app.get("/config")
        async def get_config(settings: Settings = Depends(get_settings_dependency)):
            return {"environment": settings.environment}
    """
    return get_settings()


# ============================================================================
# REPOSITORY AND SERVICE DEPENDENCIES
# ============================================================================


@lru_cache()
def get_item_repository() -> ItemRepository:
    """
    Get the process-wide item repository.

    Cached so every request shares the same in-memory store.
    """
    return ItemRepository()


@lru_cache()
def get_notification_service() -> NotificationService:
    """Get the process-wide notification service and its outbox."""
    settings = get_settings()
    return NotificationService(
        delay_seconds=settings.notification_delay_seconds,
        metrics=lesson_metrics
    )


def get_upload_service(
    settings: Settings = Depends(get_settings_dependency)
) -> UploadService:
    """Get an upload service writing into the configured directory."""
    return UploadService(settings.upload_dir)


def get_auth_service(
    settings: Settings = Depends(get_settings_dependency)
) -> AuthService:
    """Get an auth service bound to the configured API token."""
    return AuthService(settings)


# ============================================================================
# AUTHENTICATION DEPENDENCIES
# ============================================================================


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> str:
    """
    Require a valid bearer token.

    Args:
        credentials: HTTP bearer credentials
        auth_service: Authentication service

    Returns:
        The accepted token

    Raises:
        AuthenticationError: If the token is missing or wrong

    Example:
        @app.delete("/items/{item_id}")
        async def delete_item(item_id: int, token: str = Depends(verify_token)):
            ...
    """
    # HTTPBearer yields None for a missing header and for non-Bearer schemes
    if not credentials:
        logger.warning("auth_missing_credentials")
        raise AuthenticationError("Missing authentication credentials")

    if not auth_service.verify_token(credentials.credentials):
        logger.warning("auth_invalid_token")
        raise AuthenticationError("Invalid authentication token")

    logger.debug("token_accepted", token_hint=auth_service.token_hint(credentials.credentials))
    return credentials.credentials


# ============================================================================
# UTILITY DEPENDENCIES
# ============================================================================


async def get_correlation_id(request: Request) -> Optional[str]:
    """
    Get correlation ID assigned by the request logging middleware.

    Falls back to the X-Correlation-ID header.
    """
    return getattr(request.state, "correlation_id", None) or request.headers.get("X-Correlation-ID")


# ============================================================================
# PAGINATION DEPENDENCIES
# ============================================================================


class PaginationParams:
    """Pagination parameters for list endpoints."""

    def __init__(self, limit: int, offset: int, max_limit: int):
        """
        Initialize pagination parameters.

        Args:
            limit: Maximum number of items, clamped to [1, max_limit]
            offset: Number of items to skip, clamped to >= 0
            max_limit: Upper bound for limit
        """
        if limit < 1:
            limit = 1
        elif limit > max_limit:
            limit = max_limit

        if offset < 0:
            offset = 0

        self.limit = limit
        self.offset = offset


async def get_pagination_params(
    limit: Optional[int] = Query(None, description="Maximum number of items"),
    offset: int = Query(0, description="Number of items to skip"),
    settings: Settings = Depends(get_settings_dependency)
) -> PaginationParams:
    """
    Get pagination parameters from query string.

    Example:
        @app.get("/items")
        async def list_items(
            pagination: PaginationParams = Depends(get_pagination_params)
        ):
            ...
    """
    if limit is None:
        limit = settings.pagination_default_limit
    return PaginationParams(
        limit=limit,
        offset=offset,
        max_limit=settings.pagination_max_limit
    )
