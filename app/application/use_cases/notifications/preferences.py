"""Use cases for reading and updating notification preferences."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreferences
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_motivation_frequency, ensure_valid_reminder_time


def get_preferences(session: Session, user_id: int) -> NotificationPreferences:
    """Return the stored preferences of ``user_id``."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise ValueError("User not found")
    return user.notification_preferences


def update_preferences(
    session: Session,
    user_id: int,
    *,
    daily_reminder: bool | None = None,
    reminder_time: str | None = None,
    motivation_messages: bool | None = None,
    motivation_frequency: str | None = None,
    push_notifications: bool | None = None,
) -> NotificationPreferences:
    """Apply the provided fields and return the resulting preferences.

    Every field is validated before anything is written, so an invalid value
    leaves the stored preferences untouched.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    changes: dict[str, object] = {}
    if daily_reminder is not None:
        changes["daily_reminder"] = bool(daily_reminder)
    if reminder_time is not None:
        changes["reminder_time"] = ensure_valid_reminder_time(reminder_time)
    if motivation_messages is not None:
        changes["motivation_messages"] = bool(motivation_messages)
    if motivation_frequency is not None:
        changes["motivation_frequency"] = ensure_valid_motivation_frequency(
            motivation_frequency
        )
    if push_notifications is not None:
        changes["push_notifications"] = bool(push_notifications)

    if not changes:
        return user.notification_preferences

    updated = replace(user.notification_preferences, **changes)
    return repository.update_preferences(user_id, updated).notification_preferences
