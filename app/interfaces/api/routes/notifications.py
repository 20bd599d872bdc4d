"""Endpoints for notification preferences, history and manual sends."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    DeliveryOutcome,
    get_preferences,
    list_delivery_history,
    register_push_token,
    send_notification_now,
    unregister_push_token,
    update_preferences,
)
from app.application.use_cases.notifications.history import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from app.domain.entities import (
    NOTIFICATION_TYPE_DAILY_REMINDER,
    NOTIFICATION_TYPE_MOTIVATION,
    User,
)
from app.domain.exceptions import NotificationConfigurationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.schemas import (
    DeliveryHistoryRead,
    DeliveryOutcomeRead,
    DeliveryRecordRead,
    MessageResponse,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    PushTokenRequest,
    PushTokenResponse,
    SendNowResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/preferences", response_model=NotificationPreferencesRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    """Return the caller's notification preferences."""

    try:
        preferences = get_preferences(db, current_user.id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/preferences", response_model=NotificationPreferencesRead)
def write_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    """Update the provided preference fields; invalid values change nothing."""

    try:
        preferences = update_preferences(
            db, current_user.id, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return NotificationPreferencesRead.model_validate(preferences)


@router.get("/history", response_model=DeliveryHistoryRead)
def read_history(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DeliveryHistoryRead:
    """Return the caller's delivery log, newest first."""

    try:
        history = list_delivery_history(db, current_user.id, page=page, limit=limit)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return DeliveryHistoryRead(
        items=[DeliveryRecordRead.model_validate(record) for record in history.records],
        total_items=history.total_items,
        total_pages=history.total_pages,
        current_page=history.current_page,
        limit=history.limit,
    )


def _send_now(db: Session, user: User, notification_type: str) -> SendNowResponse:
    try:
        outcomes: list[DeliveryOutcome] = send_notification_now(db, user.id, notification_type)
    except NotificationConfigurationError as exc:
        logger.error("Manual %s for user %s not sent: %s", notification_type, user.id, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return SendNowResponse(
        notification_type=notification_type,
        delivered=any(outcome.succeeded for outcome in outcomes),
        outcomes=[DeliveryOutcomeRead.model_validate(asdict(outcome)) for outcome in outcomes],
    )


@router.post("/test/daily-reminder", response_model=SendNowResponse)
def send_daily_reminder_now(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> SendNowResponse:
    """Send the daily reminder to the caller immediately."""

    return _send_now(db, current_user, NOTIFICATION_TYPE_DAILY_REMINDER)


@router.post("/test/motivation", response_model=SendNowResponse)
def send_motivation_now(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> SendNowResponse:
    """Send a motivation message to the caller immediately."""

    return _send_now(db, current_user, NOTIFICATION_TYPE_MOTIVATION)


@router.post("/push-token", response_model=PushTokenResponse)
def add_push_token(
    payload: PushTokenRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> PushTokenResponse:
    """Register a device token for the caller; repeating it is harmless."""

    try:
        added = register_push_token(db, current_user.id, payload.token)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PushTokenResponse(token=payload.token.strip(), registered=added)


@router.delete("/push-token", response_model=MessageResponse)
def remove_push_token(
    payload: PushTokenRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Unregister a device token; unknown tokens are ignored."""

    try:
        removed = unregister_push_token(db, current_user.id, payload.token)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    message = "Push token removed" if removed else "Push token was not registered"
    return MessageResponse(message=message)
