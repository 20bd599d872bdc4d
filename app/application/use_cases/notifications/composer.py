"""Build the content of daily reminders and motivation messages."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from html import escape

from app.domain.entities import (
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
    NotificationContent,
    User,
)


@dataclass(frozen=True)
class MotivationMessage:
    """One entry of the motivation catalog."""

    title: str
    message: str


MOTIVATION_CATALOG: tuple[MotivationMessage, ...] = (
    MotivationMessage(
        title="You're Doing Great! 🎉",
        message=(
            "Learning new words every day brings you one step closer to your goal. "
            "Keep it up today too!"
        ),
    ),
    MotivationMessage(
        title="Small Steps, Big Results! 💪",
        message=(
            "Every flashcard is an investment. The words you learn today are the "
            "foundation of tomorrow's fluency."
        ),
    ),
    MotivationMessage(
        title="Consistency Is Power! ⚡",
        message=(
            "Ten minutes a day beats one hour a week. You're on the right track!"
        ),
    ),
    MotivationMessage(
        title="Your Progress Is Amazing! 🌟",
        message="Every new word is a milestone on your language journey. Keep going!",
    ),
    MotivationMessage(
        title="You're a Champion! 🏆",
        message=(
            "Learning a language takes patience and you're showing it. "
            "Ready to learn some new words today?"
        ),
    ),
    MotivationMessage(
        title="A Little Better Every Day! 📈",
        message="The words you learned yesterday are easier to remember today. Great progress!",
    ),
    MotivationMessage(
        title="You're Getting Closer! 🎯",
        message="Every flashcard takes you one step closer to your goal. Keep it up today!",
    ),
)

DAILY_REMINDER_SUBJECT = "📚 Daily Reminder - Time to Study Your Flashcards!"
DAILY_REMINDER_TITLE = "📚 Daily Reminder"

_FOOTER = (
    "This email was sent automatically. You can turn notifications off "
    "from the app settings."
)


def _wrap_html(heading: str, gradient: str, paragraphs: Sequence[str], cta_label: str, app_url: str) -> str:
    safe_url = escape(app_url, quote=True)
    return "".join(
        (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\">",
            f"<title>{escape(heading)}</title></head>",
            "<body style=\"font-family: Arial, sans-serif; line-height: 1.6; color: #333; "
            "max-width: 600px; margin: 0 auto; padding: 20px;\">",
            f"<div style=\"background: {gradient}; padding: 30px; text-align: center; "
            "border-radius: 10px 10px 0 0;\">",
            f"<h1 style=\"color: white; margin: 0;\">{escape(heading)}</h1></div>",
            "<div style=\"background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; "
            "border: 1px solid #e0e0e0; border-top: none;\">",
            *paragraphs,
            "<div style=\"text-align: center; margin: 30px 0;\">",
            f"<a href=\"{safe_url}\" style=\"background: {gradient}; color: white; "
            "padding: 15px 30px; text-decoration: none; border-radius: 5px; "
            f"display: inline-block; font-weight: bold;\">{escape(cta_label)}</a></div>",
            "<hr style=\"border: none; border-top: 1px solid #e0e0e0; margin: 30px 0;\">",
            f"<p style=\"font-size: 12px; color: #999; text-align: center;\">{_FOOTER}</p>",
            "</div></body></html>",
        )
    )


def compose_daily_reminder(
    user: User, flashcard_count: int, app_url: str
) -> NotificationContent:
    """Return the reminder greeting ``user`` with the global flashcard count."""

    name = user.name
    body = (
        f"Hi {name}, it's flashcard time! "
        f"There are {flashcard_count} flashcards waiting for you."
    )
    html = _wrap_html(
        DAILY_REMINDER_TITLE,
        "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        (
            f"<p>Hi <strong>{escape(name)}</strong>,</p>",
            "<p>It's flashcard time! Ready to learn some new words today?</p>",
            "<p style=\"font-size: 18px; font-weight: bold; color: #667eea;\">"
            f"📊 Total flashcards: {flashcard_count}</p>",
            "<p><strong>💡 Tip:</strong> Studying a little every day works much better "
            "than one long session a week!</p>",
        ),
        "Start Studying",
        app_url,
    )
    text = "\n".join(
        (
            "Daily Reminder",
            "",
            f"Hi {name},",
            "",
            "It's flashcard time! Ready to learn some new words today?",
            "",
            f"Total flashcards: {flashcard_count}",
            "",
            f"Open the app: {app_url}",
            "",
            _FOOTER,
        )
    )
    return NotificationContent(
        notification_type=NOTIFICATION_TYPE_DAILY_REMINDER,
        subject=DAILY_REMINDER_SUBJECT,
        title=DAILY_REMINDER_TITLE,
        body=body,
        html=html,
        text=text,
        data={"type": NOTIFICATION_TYPE_DAILY_REMINDER, "url": app_url},
    )


def pick_motivation_message(
    choice: Callable[[Sequence[MotivationMessage]], MotivationMessage] = random.choice,
) -> MotivationMessage:
    """Pick one catalog entry uniformly at random; repeats are allowed."""

    return choice(MOTIVATION_CATALOG)


def compose_motivation(
    user: User,
    app_url: str,
    *,
    choice: Callable[[Sequence[MotivationMessage]], MotivationMessage] = random.choice,
) -> NotificationContent:
    """Return a motivation message for ``user`` drawn from :data:`MOTIVATION_CATALOG`."""

    motivation = pick_motivation_message(choice)
    name = user.name
    html = _wrap_html(
        motivation.title,
        "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
        (
            f"<p>Hi <strong>{escape(name)}</strong>,</p>",
            "<p style=\"font-size: 18px; text-align: center; font-style: italic;\">"
            f"\"{escape(motivation.message)}\"</p>",
        ),
        "Keep Going",
        app_url,
    )
    text = "\n".join(
        (
            motivation.title,
            "",
            f"Hi {name},",
            "",
            motivation.message,
            "",
            f"Open the app: {app_url}",
            "",
            _FOOTER,
        )
    )
    return NotificationContent(
        notification_type=NOTIFICATION_TYPE_MOTIVATION,
        subject=f"💪 {motivation.title}",
        title=motivation.title,
        body=motivation.message,
        html=html,
        text=text,
        data={"type": NOTIFICATION_TYPE_MOTIVATION, "url": app_url},
    )


__all__ = [
    "DAILY_REMINDER_SUBJECT",
    "MOTIVATION_CATALOG",
    "MotivationMessage",
    "compose_daily_reminder",
    "compose_motivation",
    "pick_motivation_message",
]
