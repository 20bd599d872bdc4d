"""Use case for paging through a user's delivery log."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import DeliveryRecord
from app.infrastructure.repositories import DeliveryRecordRepository

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class DeliveryHistoryPage:
    """One page of delivery records, newest first."""

    records: list[DeliveryRecord]
    total_items: int
    total_pages: int
    current_page: int
    limit: int


def list_delivery_history(
    session: Session,
    user_id: int,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> DeliveryHistoryPage:
    """Return page ``page`` of ``user_id``'s delivery records."""

    if page < 1:
        raise ValueError("Page must be greater than or equal to 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValueError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

    repository = DeliveryRecordRepository(session)
    total_items = repository.count_for_user(user_id)
    records = repository.list_for_user(user_id, offset=(page - 1) * limit, limit=limit)
    return DeliveryHistoryPage(
        records=list(records),
        total_items=total_items,
        total_pages=math.ceil(total_items / limit),
        current_page=page,
        limit=limit,
    )
