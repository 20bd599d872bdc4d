"""Use cases for scheduling, composing and delivering user notifications."""

from .delivery import BatchResult, ChannelSenders, DeliveryOutcome, deliver
from .eligibility import (
    EligibilityDecision,
    frequency_to_days,
    is_daily_reminder_due,
    is_motivation_due,
)
from .history import DeliveryHistoryPage, list_delivery_history
from .preferences import get_preferences, update_preferences
from .push_tokens import register_push_token, unregister_push_token
from .scheduled import run_daily_reminder_tick, run_motivation_tick
from .send_now import send_notification_now

__all__ = [
    "BatchResult",
    "ChannelSenders",
    "DeliveryHistoryPage",
    "DeliveryOutcome",
    "EligibilityDecision",
    "deliver",
    "frequency_to_days",
    "get_preferences",
    "is_daily_reminder_due",
    "is_motivation_due",
    "list_delivery_history",
    "register_push_token",
    "run_daily_reminder_tick",
    "run_motivation_tick",
    "send_notification_now",
    "unregister_push_token",
    "update_preferences",
]
