"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from app.domain.entities import DEFAULT_REMINDER_TIME, MOTIVATION_FREQUENCY_WEEKLY
from app.infrastructure.database import Base


class UserModel(Base):
    """Database representation of an application user and its preferences."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    daily_reminder = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    reminder_time = Column(
        String(5), nullable=False, default=DEFAULT_REMINDER_TIME, index=True
    )
    motivation_messages = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    motivation_frequency = Column(
        String(10), nullable=False, default=MOTIVATION_FREQUENCY_WEEKLY
    )
    push_notifications = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )

    push_tokens = relationship(
        "PushTokenModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="PushTokenModel.id",
    )


__all__ = ["UserModel"]
