"""SQLAlchemy model for the append-only notification delivery log."""

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class DeliveryRecordModel(Base):
    """Database representation of one notification send attempt."""

    __tablename__ = "delivery_record"
    __table_args__ = (
        Index("ix_delivery_record_user_type_sent_at", "user_id", "notification_type", "sent_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # No foreign key: records outlive the users they mention.
    user_id = Column(Integer, nullable=False, index=True)
    notification_type = Column(String(30), nullable=False)
    channel = Column(String(10), nullable=False)
    destination = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=False)
    sent_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True)
    status = Column(String(10), nullable=False)
    error_message = Column(Text, nullable=True)


__all__ = ["DeliveryRecordModel"]
