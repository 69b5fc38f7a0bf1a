"""
Notification schemas for the background task endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field


EMAIL_PATTERN = r"^[\w\.\+-]+@[\w\.-]+\.\w+$"


class NotificationRequest(BaseModel):
    """Notification to deliver in the background."""
    email: str = Field(
        ...,
        pattern=EMAIL_PATTERN,
        description="Recipient address"
    )
    message: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Message body"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "student@example.com",
                "message": "Your order has shipped"
            }
        }
    }


class NotificationAccepted(BaseModel):
    """Acknowledgement returned before the notification is delivered."""
    status: str = Field(default="queued")
    email: str


class SentNotification(BaseModel):
    """Notification recorded in the outbox after delivery."""
    email: str
    message: str
    sent_at: datetime
