"""Bodies of the recurring reminder and motivation triggers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import (
    DELIVERY_STATUS_FAILED,
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
    User,
)
from app.domain.exceptions import NotificationConfigurationError
from app.infrastructure.repositories import DeliveryRecordRepository, UserRepository
from app.utils import format_clock_minute, now_in_app_timezone, truncate_to_minute

from .delivery import BatchResult, ChannelSenders, DeliveryOutcome, default_senders, deliver
from .eligibility import EligibilityDecision, is_daily_reminder_due, is_motivation_due

logger = logging.getLogger(__name__)


def _process_batch(
    session: Session,
    result: BatchResult,
    users: Iterable[User],
    decide: Callable[[User], EligibilityDecision],
    *,
    senders: ChannelSenders,
    now: datetime,
) -> BatchResult:
    """Deliver to every due user, folding each user's outcome into ``result``.

    A failure for one user is converted into a failed outcome and the loop
    moves on; only a configuration error stops the batch.
    """

    for user in users:
        result.evaluated += 1
        try:
            decision = decide(user)
        except Exception as exc:
            logger.exception("Could not evaluate %s for user %s", result.notification_type, user.id)
            result.outcomes.append(
                DeliveryOutcome(
                    user_id=user.id,
                    notification_type=result.notification_type,
                    channel=None,
                    status=DELIVERY_STATUS_FAILED,
                    error=str(exc),
                )
            )
            continue

        if not decision.due:
            logger.debug("User %s not due for %s: %s", user.id, result.notification_type, decision.reason)
            continue

        result.due += 1
        try:
            result.extend(
                deliver(session, user, result.notification_type, senders=senders, now=now)
            )
        except NotificationConfigurationError as exc:
            result.aborted_reason = str(exc)
            logger.error("Stopping %s batch: %s", result.notification_type, exc)
            break
        except Exception as exc:
            session.rollback()
            logger.exception("Could not deliver %s to user %s", result.notification_type, user.id)
            result.outcomes.append(
                DeliveryOutcome(
                    user_id=user.id,
                    notification_type=result.notification_type,
                    channel=None,
                    status=DELIVERY_STATUS_FAILED,
                    error=str(exc) or exc.__class__.__name__,
                )
            )
    return result


def _email_ready(result: BatchResult, senders: ChannelSenders) -> bool:
    try:
        senders.ensure_email_configured()
    except NotificationConfigurationError as exc:
        result.aborted_reason = str(exc)
        logger.error("Skipping %s tick: %s", result.notification_type, exc)
        return False
    return True


def run_daily_reminder_tick(
    session: Session,
    now: datetime | None = None,
    *,
    senders: ChannelSenders | None = None,
) -> BatchResult:
    """Send the daily reminder to every user whose reminder time is this minute."""

    now = truncate_to_minute(now or now_in_app_timezone())
    senders = senders or default_senders()
    result = BatchResult(notification_type=NOTIFICATION_TYPE_DAILY_REMINDER)

    users = UserRepository(session).list_with_daily_reminder()
    if not users or not _email_ready(result, senders):
        return result

    _process_batch(
        session,
        result,
        users,
        lambda user: is_daily_reminder_due(user.notification_preferences, now),
        senders=senders,
        now=now,
    )
    if result.due:
        logger.info(
            "Daily reminder tick %s: %s due, %s sent, %s failed",
            format_clock_minute(now),
            result.due,
            result.sent,
            result.failed,
        )
    return result


def run_motivation_tick(
    session: Session,
    now: datetime | None = None,
    *,
    senders: ChannelSenders | None = None,
) -> BatchResult:
    """Send a motivation message to users whose frequency window has elapsed."""

    now = truncate_to_minute(now or now_in_app_timezone())
    senders = senders or default_senders()
    result = BatchResult(notification_type=NOTIFICATION_TYPE_MOTIVATION)

    users = UserRepository(session).list_with_motivation_messages()
    if not users or not _email_ready(result, senders):
        return result

    records = DeliveryRecordRepository(session)

    def decide(user: User) -> EligibilityDecision:
        last_sent_at = records.get_last_sent_at(user.id, NOTIFICATION_TYPE_MOTIVATION)
        return is_motivation_due(user.notification_preferences, now, last_sent_at)

    _process_batch(session, result, users, decide, senders=senders, now=now)
    logger.info(
        "Motivation tick: %s evaluated, %s due, %s sent, %s failed",
        result.evaluated,
        result.due,
        result.sent,
        result.failed,
    )
    return result


__all__ = ["run_daily_reminder_tick", "run_motivation_tick"]
