"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationPreferencesRead(BaseModel):
    """Stored notification settings of the authenticated user."""

    daily_reminder: bool
    reminder_time: str = Field(..., description="Local time of the daily reminder (HH:MM)")
    motivation_messages: bool
    motivation_frequency: str
    push_notifications: bool

    model_config = ConfigDict(from_attributes=True)


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    daily_reminder: bool | None = None
    reminder_time: str | None = Field(default=None, examples=["09:00"])
    motivation_messages: bool | None = None
    motivation_frequency: str | None = Field(
        default=None, examples=["daily", "weekly", "biweekly"]
    )
    push_notifications: bool | None = None

    model_config = ConfigDict(extra="forbid")


class DeliveryRecordRead(BaseModel):
    """One entry of the delivery log."""

    id: int
    user_id: int
    notification_type: str
    channel: str
    destination: str | None
    subject: str
    sent_at: datetime
    status: str
    error_message: str | None = None

    model_config = ConfigDict(from_attributes=True)


class DeliveryHistoryRead(BaseModel):
    """A page of the delivery log, newest first."""

    items: list[DeliveryRecordRead]
    total_items: int
    total_pages: int
    current_page: int
    limit: int


class DeliveryOutcomeRead(BaseModel):
    """Result of one channel attempt for an immediate send."""

    channel: str | None
    status: str
    error: str | None = None
    record_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class SendNowResponse(BaseModel):
    notification_type: str
    delivered: bool = Field(..., description="True when at least one channel succeeded")
    outcomes: list[DeliveryOutcomeRead]


class PushTokenRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=512)


class PushTokenResponse(BaseModel):
    token: str
    registered: bool


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "DeliveryHistoryRead",
    "DeliveryOutcomeRead",
    "DeliveryRecordRead",
    "MessageResponse",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "PushTokenRequest",
    "PushTokenResponse",
    "SendNowResponse",
]
