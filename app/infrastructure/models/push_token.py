"""SQLAlchemy model for registered push device tokens."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class PushTokenModel(Base):
    """One FCM device token owned by a user."""

    __tablename__ = "push_token"
    __table_args__ = (
        UniqueConstraint("user_id", "token", name="uq_push_token_user_token"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token = Column(String(512), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", back_populates="push_tokens")


__all__ = ["PushTokenModel"]
