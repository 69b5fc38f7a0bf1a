"""
Notification service run from FastAPI background tasks.

Delivery is simulated: ``send`` sleeps for the configured delay, then
records the notification in an in-memory outbox and logs it.
"""

import threading
import time
import structlog
from datetime import datetime, timezone
from typing import List, Optional

from lessons_api.models.notifications import SentNotification
from shared.logging import bind_context, unbind_context
from shared.metrics import LessonMetrics

logger = structlog.get_logger(__name__)


class NotificationService:
    """Simulated notification sender with an in-memory outbox."""

    def __init__(self, delay_seconds: float = 0.0, metrics: Optional[LessonMetrics] = None):
        """
        Initialize notification service.

        Args:
            delay_seconds: Simulated delivery time per notification
            metrics: Metrics to update on delivery
        """
        self.delay_seconds = delay_seconds
        self.metrics = metrics
        self._outbox: List[SentNotification] = []
        self._lock = threading.Lock()

    def send(
        self,
        email: str,
        message: str,
        correlation_id: Optional[str] = None
    ) -> SentNotification:
        """
        Deliver one notification.

        Blocks for ``delay_seconds``; Starlette runs sync background tasks
        in its threadpool, so the event loop is not held up.

        Args:
            email: Recipient address
            message: Message body
            correlation_id: ID of the request that queued the notification,
                bound to the log context for the duration of the send

        Returns:
            The recorded notification
        """
        if correlation_id:
            bind_context(correlation_id=correlation_id)

        try:
            logger.info("notification_sending", email=email)

            if self.delay_seconds:
                time.sleep(self.delay_seconds)

            sent = SentNotification(
                email=email,
                message=message,
                sent_at=datetime.now(timezone.utc)
            )

            with self._lock:
                self._outbox.append(sent)

            if self.metrics is not None:
                self.metrics.notifications_sent.inc()

            logger.info("notification_sent", email=email, message_length=len(message))
            return sent
        finally:
            if correlation_id:
                unbind_context("correlation_id")

    def sent(self) -> List[SentNotification]:
        """Delivered notifications, oldest first."""
        with self._lock:
            return list(self._outbox)
