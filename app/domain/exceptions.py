"""Errors raised while composing or delivering notifications."""

from __future__ import annotations


class NotificationConfigurationError(RuntimeError):
    """Raised when a delivery channel is missing the credentials it needs."""


class EmailConfigurationError(NotificationConfigurationError):
    """Raised when SendGrid credentials are not configured."""


class PushConfigurationError(NotificationConfigurationError):
    """Raised when the FCM project or service account is not configured."""


class TransientDeliveryError(RuntimeError):
    """Raised when a transport rejected or failed to complete a send."""


class EmailDeliveryError(TransientDeliveryError):
    """Raised when SendGrid does not accept an email."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DeliveryTimeoutError(TransientDeliveryError):
    """Raised when a send attempt exceeds the configured timeout."""


class InvalidTokenError(TransientDeliveryError):
    """Raised when FCM reports that a device token is unknown or malformed."""

    def __init__(self, token: str, message: str = "Invalid or unregistered push token") -> None:
        super().__init__(message)
        self.token = token


__all__ = [
    "DeliveryTimeoutError",
    "EmailConfigurationError",
    "EmailDeliveryError",
    "InvalidTokenError",
    "NotificationConfigurationError",
    "PushConfigurationError",
    "TransientDeliveryError",
]
