"""Domain entity representing one notification delivery attempt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_DAILY_REMINDER = "daily_reminder"
NOTIFICATION_TYPE_MOTIVATION = "motivation"
NOTIFICATION_TYPES: tuple[str, ...] = (
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
)

CHANNEL_EMAIL = "email"
CHANNEL_PUSH = "push"

DELIVERY_STATUS_SENT = "sent"
DELIVERY_STATUS_FAILED = "failed"


@dataclass(frozen=True)
class DeliveryRecord:
    """Immutable fact describing a single send attempt to one recipient."""

    id: int | None
    user_id: int
    notification_type: str
    channel: str
    destination: str | None
    subject: str
    sent_at: datetime | None
    status: str
    error_message: str | None = None


__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_SENT",
    "DeliveryRecord",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_DAILY_REMINDER",
    "NOTIFICATION_TYPE_MOTIVATION",
]
