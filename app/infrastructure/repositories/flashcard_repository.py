"""Read access to the flashcard store."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.infrastructure.models import FlashcardModel


class FlashcardRepository:
    """Expose the aggregate queries the notification subsystem needs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def count(self) -> int:
        return int(self.session.scalar(select(func.count(FlashcardModel.id))) or 0)


__all__ = ["FlashcardRepository"]
