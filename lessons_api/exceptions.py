"""
Domain exceptions for the Lessons API.

Each exception carries the HTTP status code and error code it maps to.
A single application-level handler (see ``lessons_api.main``) turns any
``LessonsAPIError`` into an ``ErrorResponse`` body.
"""

from typing import Dict, Optional

from fastapi import status


class LessonsAPIError(Exception):
    """Base class for errors that map to a specific HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_ERROR"
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.detail = detail or self.default_detail
        self.headers = headers
        super().__init__(self.detail)


class ItemNotFoundError(LessonsAPIError):
    """Requested item does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "ITEM_NOT_FOUND"
    default_detail = "Item not found"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found")


class InsufficientStockError(LessonsAPIError):
    """Purchase asks for more units than the item has in stock."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INSUFFICIENT_STOCK"
    default_detail = "Insufficient stock"

    def __init__(self, item_id: int, requested: int, available: int):
        self.item_id = item_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Item {item_id} has {available} in stock, {requested} requested"
        )


class AuthenticationError(LessonsAPIError):
    """Missing or invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_FAILED"
    default_detail = "Invalid authentication credentials"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidUploadError(LessonsAPIError):
    """Uploaded file cannot be stored."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_UPLOAD"
    default_detail = "Invalid upload"
