"""ORM models used by the application infrastructure."""

from .delivery_record import DeliveryRecordModel
from .flashcard import FlashcardModel
from .push_token import PushTokenModel
from .user import UserModel

__all__ = [
    "DeliveryRecordModel",
    "FlashcardModel",
    "PushTokenModel",
    "UserModel",
]
