"""Tests for the scheduled reminder and motivation batches."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone

from app.application.use_cases.notifications import (
    run_daily_reminder_tick,
    run_motivation_tick,
    send_notification_now,
)
from app.domain.entities import DeliveryRecord
from app.infrastructure.models import FlashcardModel
from app.infrastructure.repositories import (
    DeliveryRecordRepository,
    PushTokenRepository,
)


def at(hour: int, minute: int, *, day: int = 5) -> datetime:
    return datetime(2026, 1, day, hour, minute, tzinfo=timezone.utc)


def _records(session, user_id: int) -> list[DeliveryRecord]:
    return list(DeliveryRecordRepository(session).list_for_user(user_id, limit=None))


def test_reminder_sent_only_in_the_configured_minute(session, channels, make_user):
    user = make_user(daily_reminder=True, reminder_time="09:00")

    on_time = run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())
    late = run_daily_reminder_tick(session, at(9, 1), senders=channels.senders())

    records = _records(session, user.id)
    assert len(records) == 1
    assert records[0].notification_type == "daily_reminder"
    assert records[0].channel == "email"
    assert records[0].destination == user.email
    assert records[0].status == "sent"
    assert on_time.sent == 1 and on_time.due == 1
    assert late.due == 0 and late.outcomes == []


def test_users_with_reminder_disabled_are_skipped(session, channels, make_user):
    user = make_user(daily_reminder=False, reminder_time="09:00")

    result = run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert result.evaluated == 0
    assert _records(session, user.id) == []
    assert channels.emails == []


def test_reminder_reports_flashcard_count(session, channels, make_user):
    session.add_all(
        [FlashcardModel(word=f"word{i}", translation=f"t{i}") for i in range(3)]
    )
    session.commit()
    make_user(name="Grace", daily_reminder=True, reminder_time="07:30")

    run_daily_reminder_tick(session, at(7, 30), senders=channels.senders())

    (email,) = channels.emails
    assert "Grace" in email["text"]
    assert "Total flashcards: 3" in email["text"]


def test_one_failing_user_does_not_stop_the_batch(session, channels, make_user):
    first = make_user(daily_reminder=True, reminder_time="09:00")
    broken = make_user(daily_reminder=True, reminder_time="09:00")
    last = make_user(daily_reminder=True, reminder_time="09:00")
    channels.failing_recipients.add(broken.email)

    result = run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert result.sent == 2
    assert result.failed == 1
    assert [r.status for r in _records(session, first.id)] == ["sent"]
    assert [r.status for r in _records(session, last.id)] == ["sent"]
    (failed,) = _records(session, broken.id)
    assert failed.status == "failed"
    assert "mailbox unavailable" in failed.error_message


def test_missing_email_configuration_aborts_without_records(session, channels, make_user):
    user = make_user(daily_reminder=True, reminder_time="09:00")
    channels.email_configured = False

    result = run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert result.aborted_reason
    assert result.outcomes == []
    assert _records(session, user.id) == []


def test_invalid_push_token_is_pruned(session, channels, make_user):
    user = make_user(
        daily_reminder=True,
        reminder_time="09:00",
        tokens=("token-a", "token-b", "token-c"),
    )
    channels.invalid_tokens.add("token-b")

    run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert PushTokenRepository(session).list_for_user(user.id) == ["token-a", "token-c"]
    records = _records(session, user.id)
    push_records = [r for r in records if r.channel == "push"]
    assert len(push_records) == 3
    assert sorted(r.status for r in push_records) == ["failed", "sent", "sent"]
    assert all(r.destination is None for r in push_records)
    assert [r.status for r in records if r.channel == "email"] == ["sent"]


def test_push_skipped_when_user_disabled_push(session, channels, make_user):
    user = make_user(
        daily_reminder=True,
        reminder_time="09:00",
        push_notifications=False,
        tokens=("token-a",),
    )

    run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert channels.pushes == []
    assert [r.channel for r in _records(session, user.id)] == ["email"]


def test_push_skipped_when_not_configured(session, channels, make_user):
    user = make_user(daily_reminder=True, reminder_time="09:00", tokens=("token-a",))
    channels.push_configured = False

    run_daily_reminder_tick(session, at(9, 0), senders=channels.senders())

    assert channels.pushes == []
    assert PushTokenRepository(session).list_for_user(user.id) == ["token-a"]
    assert [r.channel for r in _records(session, user.id)] == ["email"]


def test_slow_email_send_is_recorded_as_failed(session, channels, make_user):
    user = make_user(daily_reminder=True, reminder_time="09:00")

    def slow_send(*_args, **_kwargs):
        time.sleep(0.5)

    channels.send_email = slow_send

    result = run_daily_reminder_tick(session, at(9, 0), senders=channels.senders(timeout=0.05))

    assert result.failed == 1
    (record,) = _records(session, user.id)
    assert record.status == "failed"
    assert "timed out" in record.error_message


def test_motivation_respects_frequency(session, channels, make_user):
    daily = make_user(motivation_messages=True, motivation_frequency="daily")
    weekly = make_user(motivation_messages=True, motivation_frequency="weekly")
    senders = channels.senders()

    run_motivation_tick(session, at(10, 0, day=5), senders=senders)
    result = run_motivation_tick(session, at(10, 0, day=8), senders=senders)

    assert result.due == 1
    assert len(_records(session, daily.id)) == 2
    assert len(_records(session, weekly.id)) == 1

    run_motivation_tick(session, at(10, 0, day=12), senders=senders)
    assert len(_records(session, weekly.id)) == 2


def test_failed_motivation_does_not_reset_the_clock(session, channels, make_user):
    user = make_user(motivation_messages=True, motivation_frequency="weekly")
    repository = DeliveryRecordRepository(session)
    repository.create(
        DeliveryRecord(
            id=None,
            user_id=user.id,
            notification_type="motivation",
            channel="email",
            destination=user.email,
            subject="old",
            sent_at=at(10, 0, day=1) - timedelta(days=7),
            status="sent",
        )
    )
    repository.create(
        DeliveryRecord(
            id=None,
            user_id=user.id,
            notification_type="motivation",
            channel="email",
            destination=user.email,
            subject="failed",
            sent_at=at(10, 0, day=4),
            status="failed",
            error_message="boom",
        )
    )

    result = run_motivation_tick(session, at(10, 0, day=5), senders=channels.senders())

    assert result.sent == 1


def test_manual_send_is_never_deduplicated(session, channels, make_user):
    user = make_user(daily_reminder=False)
    senders = channels.senders()

    send_notification_now(session, user.id, "daily_reminder", senders=senders)
    send_notification_now(session, user.id, "daily_reminder", senders=senders)

    records = _records(session, user.id)
    assert len(records) == 2
    assert {r.notification_type for r in records} == {"daily_reminder"}
    assert len(channels.emails) == 2


def test_daily_motivation_survives_start_jitter(session, channels, make_user):
    user = make_user(motivation_messages=True, motivation_frequency="daily")
    senders = channels.senders()

    first = run_motivation_tick(
        session, at(10, 0, day=5).replace(microsecond=300_000), senders=senders
    )
    second = run_motivation_tick(
        session, at(10, 0, day=6).replace(microsecond=100_000), senders=senders
    )

    assert first.sent == 1
    assert second.due == 1 and second.sent == 1
    assert [record.sent_at.second for record in _records(session, user.id)] == [0, 0]


def test_daily_and_weekly_users_two_days_after_last_message(session, channels, make_user):
    daily = make_user(motivation_messages=True, motivation_frequency="daily")
    weekly = make_user(motivation_messages=True, motivation_frequency="weekly")
    repository = DeliveryRecordRepository(session)
    for user in (daily, weekly):
        repository.create(
            DeliveryRecord(
                id=None,
                user_id=user.id,
                notification_type="motivation",
                channel="email",
                destination=user.email,
                subject="earlier",
                sent_at=at(10, 0, day=3),
                status="sent",
            )
        )

    result = run_motivation_tick(session, at(10, 0, day=5), senders=channels.senders())

    assert result.due == 1
    assert [email["to"] for email in channels.emails] == [daily.email]
    assert len(_records(session, weekly.id)) == 1


def test_hung_email_sends_do_not_starve_later_recipients(session, channels, make_user):
    hung = [make_user(daily_reminder=True, reminder_time="09:00") for _ in range(5)]
    healthy = make_user(daily_reminder=True, reminder_time="09:00")
    hung_recipients = {user.email for user in hung}
    release = threading.Event()
    deliver_email = channels.send_email

    def send_email(subject, html_content, recipient, *, text_content=None):
        if recipient in hung_recipients:
            release.wait(5)
            return
        deliver_email(subject, html_content, recipient, text_content=text_content)

    channels.send_email = send_email
    try:
        result = run_daily_reminder_tick(
            session, at(9, 0), senders=channels.senders(timeout=0.1)
        )
    finally:
        release.set()

    assert result.failed == 5
    assert [r.status for r in _records(session, healthy.id)] == ["sent"]
    assert [email["to"] for email in channels.emails] == [healthy.email]


def test_slow_push_token_fails_alone(session, channels, make_user):
    user = make_user(
        daily_reminder=True,
        reminder_time="09:00",
        tokens=("slow", "token-b", "stale"),
    )
    channels.invalid_tokens.add("stale")
    release = threading.Event()
    deliver_push = channels.send_push

    def send_push(tokens, title, body, data=None):
        if "slow" in tokens:
            release.wait(5)
        return deliver_push(tokens, title, body, data)

    channels.send_push = send_push
    try:
        run_daily_reminder_tick(session, at(9, 0), senders=channels.senders(timeout=0.1))
    finally:
        release.set()

    push_records = [r for r in _records(session, user.id) if r.channel == "push"]
    assert sorted(r.status for r in push_records) == ["failed", "failed", "sent"]
    assert sum("timed out" in (r.error_message or "") for r in push_records) == 1
    assert PushTokenRepository(session).list_for_user(user.id) == ["slow", "token-b"]
