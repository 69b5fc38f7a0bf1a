"""API routers, one per lesson area."""

from lessons_api.routers import items, notifications, secure, uploads

__all__ = ["items", "notifications", "secure", "uploads"]
