"""Persistence helpers for the notification delivery log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.entities import DELIVERY_STATUS_SENT, DeliveryRecord
from app.infrastructure.models import DeliveryRecordModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class DeliveryRecordRepository:
    """Append and query :class:`DeliveryRecord` entries.

    Records are never updated or deleted here; the log is history.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, record: DeliveryRecord) -> DeliveryRecord:
        model = DeliveryRecordModel(
            user_id=record.user_id,
            notification_type=record.notification_type,
            channel=record.channel,
            destination=record.destination,
            subject=record.subject,
            sent_at=ensure_app_naive_datetime(record.sent_at or now_in_app_timezone()),
            status=record.status,
            error_message=record.error_message,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self, user_id: int, *, offset: int = 0, limit: int | None = 10
    ) -> Sequence[DeliveryRecord]:
        query = (
            self.session.query(DeliveryRecordModel)
            .filter(DeliveryRecordModel.user_id == user_id)
            .order_by(DeliveryRecordModel.sent_at.desc(), DeliveryRecordModel.id.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_user(self, user_id: int) -> int:
        statement = select(func.count(DeliveryRecordModel.id)).where(
            DeliveryRecordModel.user_id == user_id
        )
        return int(self.session.scalar(statement) or 0)

    def get_last_sent_at(self, user_id: int, notification_type: str) -> datetime | None:
        """Return when ``notification_type`` last reached ``user_id`` successfully."""

        statement = select(func.max(DeliveryRecordModel.sent_at)).where(
            DeliveryRecordModel.user_id == user_id,
            DeliveryRecordModel.notification_type == notification_type,
            DeliveryRecordModel.status == DELIVERY_STATUS_SENT,
        )
        return ensure_app_timezone(self.session.scalar(statement))

    @staticmethod
    def _to_entity(model: DeliveryRecordModel) -> DeliveryRecord:
        return DeliveryRecord(
            id=model.id,
            user_id=model.user_id,
            notification_type=model.notification_type,
            channel=model.channel,
            destination=model.destination,
            subject=model.subject,
            sent_at=ensure_app_timezone(model.sent_at),
            status=model.status,
            error_message=model.error_message,
        )


__all__ = ["DeliveryRecordRepository"]
