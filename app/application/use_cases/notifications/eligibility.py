"""Pure rules deciding whether a user is due for a notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities import (
    MOTIVATION_FREQUENCY_BIWEEKLY,
    MOTIVATION_FREQUENCY_DAILY,
    MOTIVATION_FREQUENCY_WEEKLY,
    NotificationPreferences,
)
from app.utils import format_clock_minute, whole_days_between

_FREQUENCY_DAYS: dict[str, int] = {
    MOTIVATION_FREQUENCY_DAILY: 1,
    MOTIVATION_FREQUENCY_WEEKLY: 7,
    MOTIVATION_FREQUENCY_BIWEEKLY: 14,
}


@dataclass(frozen=True)
class EligibilityDecision:
    """Describe whether a notification is due and why."""

    due: bool
    reason: str

    def __bool__(self) -> bool:
        return self.due


def frequency_to_days(frequency: str) -> int:
    """Return the minimum number of days between motivation messages."""

    try:
        return _FREQUENCY_DAYS[frequency]
    except KeyError as exc:
        raise ValueError(f"Unknown motivation frequency: {frequency!r}") from exc


def is_daily_reminder_due(
    preferences: NotificationPreferences, now: datetime
) -> EligibilityDecision:
    """Return the decision for the daily reminder at the minute containing ``now``."""

    if not preferences.daily_reminder:
        return EligibilityDecision(due=False, reason="daily reminder disabled")

    current_minute = format_clock_minute(now)
    if current_minute != preferences.reminder_time:
        return EligibilityDecision(
            due=False,
            reason=f"reminder time {preferences.reminder_time} does not match {current_minute}",
        )
    return EligibilityDecision(due=True, reason=f"reminder time {current_minute} reached")


def is_motivation_due(
    preferences: NotificationPreferences,
    now: datetime,
    last_sent_at: datetime | None,
) -> EligibilityDecision:
    """Return the decision for a motivation message.

    ``last_sent_at`` must come from successful deliveries only; failed
    attempts never move the clock.
    """

    if not preferences.motivation_messages:
        return EligibilityDecision(due=False, reason="motivation messages disabled")

    if last_sent_at is None:
        return EligibilityDecision(due=True, reason="no motivation message sent yet")

    required_days = frequency_to_days(preferences.motivation_frequency)
    elapsed_days = whole_days_between(last_sent_at, now)
    if elapsed_days < required_days:
        return EligibilityDecision(
            due=False,
            reason=f"{elapsed_days} of {required_days} days elapsed",
        )
    return EligibilityDecision(
        due=True, reason=f"{elapsed_days} days elapsed (frequency {required_days})"
    )


__all__ = [
    "EligibilityDecision",
    "frequency_to_days",
    "is_daily_reminder_due",
    "is_motivation_due",
]
