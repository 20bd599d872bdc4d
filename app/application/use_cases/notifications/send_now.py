"""Use case for sending a notification immediately, skipping eligibility."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import NOTIFICATION_TYPES
from app.infrastructure.repositories import UserRepository

from .delivery import ChannelSenders, DeliveryOutcome, deliver


def send_notification_now(
    session: Session,
    user_id: int,
    notification_type: str,
    *,
    senders: ChannelSenders | None = None,
    now: datetime | None = None,
) -> list[DeliveryOutcome]:
    """Compose, send and record ``notification_type`` for ``user_id`` right away.

    Repeated calls are not deduplicated; each one produces its own records.
    """

    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError("Unknown notification type")

    user = UserRepository(session).get(user_id)
    if user is None:
        raise ValueError("User not found")

    return deliver(session, user, notification_type, senders=senders, now=now)
