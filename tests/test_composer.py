"""Tests for the notification content composer."""

from __future__ import annotations

from app.application.use_cases.notifications.composer import (
    DAILY_REMINDER_SUBJECT,
    MOTIVATION_CATALOG,
    compose_daily_reminder,
    compose_motivation,
    pick_motivation_message,
)
from app.domain.entities import User


def _user(name: str = "Ada") -> User:
    return User(
        id=7,
        name=name,
        email="ada@example.com",
        password="x",
        is_active=True,
        created_at=None,
        updated_at=None,
    )


def test_daily_reminder_mentions_name_and_flashcard_count():
    content = compose_daily_reminder(_user(), 42, "https://app.example.com")

    assert content.notification_type == "daily_reminder"
    assert content.subject == DAILY_REMINDER_SUBJECT
    assert "Ada" in content.body
    assert "42" in content.body
    assert "42" in content.html and "42" in content.text
    assert content.data == {"type": "daily_reminder", "url": "https://app.example.com"}


def test_daily_reminder_escapes_name_in_html():
    content = compose_daily_reminder(_user("<b>Eve</b>"), 1, "https://app.example.com")

    assert "<b>Eve</b>" not in content.html
    assert "&lt;b&gt;Eve&lt;/b&gt;" in content.html


def test_motivation_uses_injected_choice():
    chosen = MOTIVATION_CATALOG[2]

    content = compose_motivation(
        _user(), "https://app.example.com", choice=lambda catalog: catalog[2]
    )

    assert content.notification_type == "motivation"
    assert content.title == chosen.title
    assert content.subject == f"💪 {chosen.title}"
    assert content.body == chosen.message
    assert content.data["type"] == "motivation"


def test_pick_motivation_message_returns_catalog_entry():
    assert len(MOTIVATION_CATALOG) == 7
    for _ in range(20):
        assert pick_motivation_message() in MOTIVATION_CATALOG
