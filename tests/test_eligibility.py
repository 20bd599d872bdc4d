"""Unit tests for the notification eligibility rules."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notifications import (
    frequency_to_days,
    is_daily_reminder_due,
    is_motivation_due,
)
from app.domain.entities import NotificationPreferences

NOW = datetime(2026, 1, 5, 9, 0, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("frequency", "days"), [("daily", 1), ("weekly", 7), ("biweekly", 14)]
)
def test_frequency_to_days(frequency, days):
    assert frequency_to_days(frequency) == days


def test_frequency_to_days_rejects_unknown_value():
    with pytest.raises(ValueError):
        frequency_to_days("monthly")


def test_daily_reminder_due_only_in_matching_minute():
    preferences = NotificationPreferences(daily_reminder=True, reminder_time="09:00")

    assert is_daily_reminder_due(preferences, NOW).due
    assert not is_daily_reminder_due(preferences, NOW + timedelta(minutes=1)).due
    assert not is_daily_reminder_due(preferences, NOW - timedelta(minutes=1)).due


def test_daily_reminder_never_due_when_disabled():
    preferences = NotificationPreferences(daily_reminder=False, reminder_time="09:00")

    decision = is_daily_reminder_due(preferences, NOW)

    assert not decision
    assert "disabled" in decision.reason


def test_motivation_due_without_previous_delivery():
    preferences = NotificationPreferences(motivation_messages=True)

    assert is_motivation_due(preferences, NOW, None).due


def test_motivation_never_due_when_disabled():
    preferences = NotificationPreferences(motivation_messages=False)

    assert not is_motivation_due(preferences, NOW, None).due


def test_daily_and_weekly_users_two_days_after_last_message():
    last_sent_at = NOW - timedelta(days=2)
    daily = NotificationPreferences(motivation_messages=True, motivation_frequency="daily")
    weekly = NotificationPreferences(motivation_messages=True, motivation_frequency="weekly")

    assert is_motivation_due(daily, NOW, last_sent_at).due
    assert not is_motivation_due(weekly, NOW, last_sent_at).due


@pytest.mark.parametrize(
    ("frequency", "elapsed", "expected"),
    [
        ("daily", timedelta(hours=23, minutes=59), False),
        ("daily", timedelta(days=1), True),
        ("weekly", timedelta(days=6, hours=23), False),
        ("weekly", timedelta(days=7), True),
        ("biweekly", timedelta(days=13), False),
        ("biweekly", timedelta(days=14), True),
    ],
)
def test_motivation_window_uses_whole_days(frequency, elapsed, expected):
    preferences = NotificationPreferences(
        motivation_messages=True, motivation_frequency=frequency
    )

    assert is_motivation_due(preferences, NOW, NOW - elapsed).due is expected
