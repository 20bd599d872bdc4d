"""Domain entities exposed by the application."""

from .delivery_record import (
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_SENT,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
    DeliveryRecord,
)
from .notification_content import NotificationContent
from .notification_preferences import (
    DEFAULT_REMINDER_TIME,
    MOTIVATION_FREQUENCIES,
    MOTIVATION_FREQUENCY_BIWEEKLY,
    MOTIVATION_FREQUENCY_DAILY,
    MOTIVATION_FREQUENCY_WEEKLY,
    NotificationPreferences,
)
from .user import User

__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_PUSH",
    "DEFAULT_REMINDER_TIME",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_SENT",
    "DeliveryRecord",
    "MOTIVATION_FREQUENCIES",
    "MOTIVATION_FREQUENCY_BIWEEKLY",
    "MOTIVATION_FREQUENCY_DAILY",
    "MOTIVATION_FREQUENCY_WEEKLY",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_DAILY_REMINDER",
    "NOTIFICATION_TYPE_MOTIVATION",
    "NotificationContent",
    "NotificationPreferences",
    "User",
]
