"""
Notifications router.

Queues a simulated notification as a FastAPI background task and
exposes the outbox of delivered notifications.
"""

import structlog
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, status

from lessons_api.dependencies import get_correlation_id, get_notification_service
from lessons_api.models.notifications import (
    NotificationAccepted,
    NotificationRequest,
    SentNotification
)
from lessons_api.services.notification_service import NotificationService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "",
    response_model=NotificationAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Send Notification",
    description="""
    Queue a notification.

    The response is returned immediately; delivery happens after the
    response is sent.
    """
)
async def send_notification(
    notification: NotificationRequest,
    background_tasks: BackgroundTasks,
    service: NotificationService = Depends(get_notification_service),
    correlation_id: Optional[str] = Depends(get_correlation_id)
) -> NotificationAccepted:
    background_tasks.add_task(
        service.send,
        notification.email,
        notification.message,
        correlation_id=correlation_id
    )
    logger.info("notification_queued", email=notification.email)
    return NotificationAccepted(email=notification.email)


@router.get(
    "",
    response_model=List[SentNotification],
    status_code=status.HTTP_200_OK,
    summary="List Sent Notifications"
)
async def list_notifications(
    service: NotificationService = Depends(get_notification_service)
) -> List[SentNotification]:
    """Delivered notifications, oldest first."""
    return service.sent()
