"""Use cases for registering and removing push device tokens."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import PushTokenRepository

from .validators import ensure_valid_push_token


def register_push_token(session: Session, user_id: int, token: str) -> bool:
    """Add ``token`` to the user's set; return ``False`` if it was already there."""

    return PushTokenRepository(session).add(user_id, ensure_valid_push_token(token))


def unregister_push_token(session: Session, user_id: int, token: str) -> bool:
    """Remove ``token`` from the user's set; removing an absent token is a no-op."""

    return PushTokenRepository(session).remove(user_id, ensure_valid_push_token(token))
