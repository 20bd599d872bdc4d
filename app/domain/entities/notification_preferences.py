"""Value object describing how a user wants to be notified."""

from __future__ import annotations

from dataclasses import dataclass

MOTIVATION_FREQUENCY_DAILY = "daily"
MOTIVATION_FREQUENCY_WEEKLY = "weekly"
MOTIVATION_FREQUENCY_BIWEEKLY = "biweekly"

MOTIVATION_FREQUENCIES: tuple[str, ...] = (
    MOTIVATION_FREQUENCY_DAILY,
    MOTIVATION_FREQUENCY_WEEKLY,
    MOTIVATION_FREQUENCY_BIWEEKLY,
)

DEFAULT_REMINDER_TIME = "09:00"


@dataclass(frozen=True)
class NotificationPreferences:
    """Notification settings embedded in a user."""

    daily_reminder: bool = False
    reminder_time: str = DEFAULT_REMINDER_TIME
    motivation_messages: bool = False
    motivation_frequency: str = MOTIVATION_FREQUENCY_WEEKLY
    push_notifications: bool = True


__all__ = [
    "DEFAULT_REMINDER_TIME",
    "MOTIVATION_FREQUENCIES",
    "MOTIVATION_FREQUENCY_BIWEEKLY",
    "MOTIVATION_FREQUENCY_DAILY",
    "MOTIVATION_FREQUENCY_WEEKLY",
    "NotificationPreferences",
]
