from .auth import RegisterRequest, Token
from .notification import (
    DeliveryHistoryRead,
    DeliveryOutcomeRead,
    DeliveryRecordRead,
    MessageResponse,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    PushTokenRequest,
    PushTokenResponse,
    SendNowResponse,
)
from .user import UserRead

__all__ = [
    "DeliveryHistoryRead",
    "DeliveryOutcomeRead",
    "DeliveryRecordRead",
    "MessageResponse",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "PushTokenRequest",
    "PushTokenResponse",
    "RegisterRequest",
    "SendNowResponse",
    "Token",
    "UserRead",
]
