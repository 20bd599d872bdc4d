"""SQLAlchemy model for vocabulary flashcards."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.infrastructure.database import Base


class FlashcardModel(Base):
    """Database representation of a flashcard."""

    __tablename__ = "flashcard"

    id = Column(Integer, primary_key=True, index=True)
    word = Column(String(255), nullable=False)
    translation = Column(String(255), nullable=True)
    example = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["FlashcardModel"]
