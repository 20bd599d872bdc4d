"""Domain entity representing a user."""

from dataclasses import dataclass, field
from datetime import datetime

from .notification_preferences import NotificationPreferences


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    notification_preferences: NotificationPreferences = field(
        default_factory=NotificationPreferences
    )
    push_tokens: tuple[str, ...] = ()
