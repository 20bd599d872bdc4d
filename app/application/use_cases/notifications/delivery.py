"""Shared compose, send and record primitive for notification delivery."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_PUSH,
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_SENT,
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
    DeliveryRecord,
    NotificationContent,
    User,
)
from app.domain.exceptions import (
    DeliveryTimeoutError,
    InvalidTokenError,
    NotificationConfigurationError,
    PushConfigurationError,
    TransientDeliveryError,
)
from app.infrastructure import email as email_channel
from app.infrastructure import push as push_channel
from app.infrastructure.push import PUSH_STATUS_FAILED, PushResult
from app.infrastructure.repositories import (
    DeliveryRecordRepository,
    FlashcardRepository,
    PushTokenRepository,
)
from app.utils import now_in_app_timezone

from .composer import compose_daily_reminder, compose_motivation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelSenders:
    """Transports used by :func:`deliver`; replaced wholesale in tests."""

    send_email: Callable[..., None] = email_channel.send_email
    ensure_email_configured: Callable[[], None] = email_channel.ensure_email_configured
    send_push: Callable[..., list[PushResult]] = push_channel.send_push
    is_push_configured: Callable[[], bool] = push_channel.is_push_configured
    timeout: float | None = None


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one attempt for one user on one channel."""

    user_id: int
    notification_type: str
    channel: str | None
    status: str
    error: str | None = None
    record_id: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == DELIVERY_STATUS_SENT


@dataclass
class BatchResult:
    """Fold of every outcome produced by one scheduler tick."""

    notification_type: str
    evaluated: int = 0
    due: int = 0
    outcomes: list[DeliveryOutcome] = field(default_factory=list)
    aborted_reason: str | None = None

    def extend(self, outcomes: Iterable[DeliveryOutcome]) -> None:
        self.outcomes.extend(outcomes)

    @property
    def sent(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.succeeded)


def default_senders() -> ChannelSenders:
    return ChannelSenders()


def _call_with_timeout(timeout: float, func: Callable[..., Any], *args, **kwargs) -> Any:
    """Run ``func`` on its own worker thread and give up after ``timeout`` seconds.

    A call that never returns keeps only its own thread; later sends still get
    a fresh worker. The transports carry their own timeouts so such threads end.
    """

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="notification-send")
    future = executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as exc:
        raise DeliveryTimeoutError(f"Send attempt timed out after {timeout:g} seconds") from exc
    finally:
        executor.shutdown(wait=False)


def compose_content(
    session: Session, user: User, notification_type: str
) -> NotificationContent:
    """Build the content for ``notification_type`` addressed to ``user``."""

    app_url = get_settings().frontend_url
    if notification_type == NOTIFICATION_TYPE_DAILY_REMINDER:
        flashcard_count = FlashcardRepository(session).count()
        return compose_daily_reminder(user, flashcard_count, app_url)
    if notification_type == NOTIFICATION_TYPE_MOTIVATION:
        return compose_motivation(user, app_url)
    raise ValueError(f"Unknown notification type: {notification_type!r}")


def _record(
    session: Session,
    *,
    user: User,
    content: NotificationContent,
    channel: str,
    destination: str | None,
    subject: str,
    sent_at: datetime,
    error: str | None,
) -> DeliveryOutcome:
    status = DELIVERY_STATUS_FAILED if error else DELIVERY_STATUS_SENT
    record = DeliveryRecordRepository(session).create(
        DeliveryRecord(
            id=None,
            user_id=user.id,
            notification_type=content.notification_type,
            channel=channel,
            destination=destination,
            subject=subject,
            sent_at=sent_at,
            status=status,
            error_message=error,
        )
    )
    return DeliveryOutcome(
        user_id=user.id,
        notification_type=content.notification_type,
        channel=channel,
        status=status,
        error=error,
        record_id=record.id,
    )


def _deliver_email(
    session: Session,
    user: User,
    content: NotificationContent,
    senders: ChannelSenders,
    timeout: float,
    sent_at: datetime,
) -> DeliveryOutcome:
    error: str | None = None
    try:
        _call_with_timeout(
            timeout,
            senders.send_email,
            content.subject,
            content.html,
            user.email,
            text_content=content.text,
        )
    except NotificationConfigurationError:
        raise
    except TransientDeliveryError as exc:
        error = str(exc)
    except Exception as exc:
        logger.exception("Unexpected error emailing %s to %s", content.notification_type, user.email)
        error = str(exc) or exc.__class__.__name__

    if error:
        logger.error("%s email to %s failed: %s", content.notification_type, user.email, error)
    else:
        logger.info("%s email sent to %s", content.notification_type, user.email)

    return _record(
        session,
        user=user,
        content=content,
        channel=CHANNEL_EMAIL,
        destination=user.email,
        subject=content.subject,
        sent_at=sent_at,
        error=error,
    )


def _push_tokens_for(user: User) -> Sequence[str]:
    if not user.notification_preferences.push_notifications:
        return ()
    return user.push_tokens


def _deliver_push(
    session: Session,
    user: User,
    content: NotificationContent,
    senders: ChannelSenders,
    timeout: float,
    sent_at: datetime,
) -> list[DeliveryOutcome]:
    tokens = list(_push_tokens_for(user))
    if not tokens:
        return []
    if not senders.is_push_configured():
        logger.debug("Push is not configured; skipping %s push for user %s", content.notification_type, user.id)
        return []

    # Each token gets its own time budget so a slow device cannot fail the rest.
    results: list[PushResult] = []
    for token in tokens:
        try:
            results.extend(
                _call_with_timeout(
                    timeout, senders.send_push, [token], content.title, content.body, content.data
                )
            )
        except PushConfigurationError as exc:
            logger.warning("Skipping push for user %s: %s", user.id, exc)
            break
        except Exception as exc:
            if not isinstance(exc, TransientDeliveryError):
                logger.exception("Unexpected error sending push to user %s", user.id)
            results.append(
                PushResult(
                    token=token,
                    status=PUSH_STATUS_FAILED,
                    error=str(exc) or exc.__class__.__name__,
                )
            )

    token_repository = PushTokenRepository(session)
    outcomes: list[DeliveryOutcome] = []
    for result in results:
        error = result.error if not result.succeeded else None
        if result.token_invalid:
            invalid = InvalidTokenError(result.token, result.error or "Invalid or unregistered push token")
            error = str(invalid)
            if token_repository.remove(user.id, invalid.token):
                logger.info("Pruned invalid push token %s... for user %s", invalid.token[:8], user.id)
        elif not result.succeeded and not error:
            error = "Push delivery failed"
        outcomes.append(
            _record(
                session,
                user=user,
                content=content,
                channel=CHANNEL_PUSH,
                destination=None,
                subject=content.title,
                sent_at=sent_at,
                error=error,
            )
        )
    return outcomes


def deliver(
    session: Session,
    user: User,
    notification_type: str,
    *,
    senders: ChannelSenders | None = None,
    now: datetime | None = None,
) -> list[DeliveryOutcome]:
    """Compose, send and record ``notification_type`` for ``user`` on every channel.

    Each attempt is written to the delivery log whatever its outcome. A
    missing email configuration raises before anything is sent or recorded.
    """

    senders = senders or default_senders()
    timeout = senders.timeout or get_settings().notification_send_timeout_seconds
    sent_at = now or now_in_app_timezone()

    senders.ensure_email_configured()
    content = compose_content(session, user, notification_type)

    outcomes = [_deliver_email(session, user, content, senders, timeout, sent_at)]
    outcomes.extend(_deliver_push(session, user, content, senders, timeout, sent_at))
    return outcomes


__all__ = [
    "BatchResult",
    "ChannelSenders",
    "DeliveryOutcome",
    "compose_content",
    "default_senders",
    "deliver",
]
