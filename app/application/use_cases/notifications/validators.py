"""Validation helpers for notification preference input."""

import re

from app.domain.entities import MOTIVATION_FREQUENCIES

_REMINDER_TIME_PATTERN = re.compile(r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)$")


def ensure_valid_reminder_time(value: str) -> str:
    """Return ``value`` as a zero padded ``HH:MM`` string or raise ``ValueError``."""

    match = _REMINDER_TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError("Reminder time must use the 24-hour HH:MM format")
    return f"{int(match.group('hour')):02d}:{match.group('minute')}"


def ensure_valid_motivation_frequency(value: str) -> str:
    """Return the normalized frequency or raise ``ValueError``."""

    normalized = value.strip().lower() if isinstance(value, str) else ""
    if normalized not in MOTIVATION_FREQUENCIES:
        raise ValueError("Motivation frequency must be 'daily', 'weekly' or 'biweekly'")
    return normalized


def ensure_valid_push_token(value: str) -> str:
    """Return the stripped token or raise ``ValueError`` when it is empty."""

    token = value.strip() if isinstance(value, str) else ""
    if not token:
        raise ValueError("Push token is required")
    if len(token) > 512:
        raise ValueError("Push token is too long")
    return token
