"""Channel agnostic content produced by the message composer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NotificationContent:
    """Title, body and renderings shared by the email and push channels."""

    notification_type: str
    subject: str
    title: str
    body: str
    html: str
    text: str
    data: dict[str, str] = field(default_factory=dict)


__all__ = ["NotificationContent"]
