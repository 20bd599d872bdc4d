"""Repository implementations for infrastructure layer."""

from .delivery_record_repository import DeliveryRecordRepository
from .flashcard_repository import FlashcardRepository
from .push_token_repository import PushTokenRepository
from .user_repository import UserRepository

__all__ = [
    "DeliveryRecordRepository",
    "FlashcardRepository",
    "PushTokenRepository",
    "UserRepository",
]
