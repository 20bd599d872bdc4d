"""Persistence helpers for push device tokens."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.infrastructure.models import PushTokenModel


class PushTokenRepository:
    """Maintain the set of push tokens registered for each user.

    Both mutations touch a single ``(user_id, token)`` row so concurrent
    registrations, removals and scheduler pruning never overwrite each other.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int) -> list[str]:
        statement = (
            select(PushTokenModel.token)
            .where(PushTokenModel.user_id == user_id)
            .order_by(PushTokenModel.id)
        )
        return list(self.session.scalars(statement))

    def add(self, user_id: int, token: str) -> bool:
        """Register ``token`` for ``user_id``; return ``False`` when already present."""

        exists = self.session.scalar(
            select(PushTokenModel.id).where(
                PushTokenModel.user_id == user_id, PushTokenModel.token == token
            )
        )
        if exists is not None:
            return False

        self.session.add(PushTokenModel(user_id=user_id, token=token))
        try:
            self.session.commit()
        except IntegrityError:
            # Another request registered the same token first.
            self.session.rollback()
            return False
        return True

    def remove(self, user_id: int, token: str) -> bool:
        """Delete ``token`` if present; return whether a row was removed."""

        result = self.session.execute(
            delete(PushTokenModel).where(
                PushTokenModel.user_id == user_id, PushTokenModel.token == token
            )
        )
        self.session.commit()
        return bool(result.rowcount)


__all__ = ["PushTokenRepository"]
