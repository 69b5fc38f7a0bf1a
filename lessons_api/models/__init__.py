"""Data models for the FastAPI service.

This package contains Pydantic models for request/response validation.
"""

from lessons_api.models.items import (
    Category,
    ErrorResponse,
    Item,
    ItemCreate,
    ItemUpdate,
    PurchaseRequest,
)
from lessons_api.models.notifications import (
    NotificationAccepted,
    NotificationRequest,
    SentNotification,
)
from lessons_api.models.uploads import UploadResult

__all__ = [
    "Category",
    "ErrorResponse",
    "Item",
    "ItemCreate",
    "ItemUpdate",
    "PurchaseRequest",
    "NotificationAccepted",
    "NotificationRequest",
    "SentNotification",
    "UploadResult",
]
