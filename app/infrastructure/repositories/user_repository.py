"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreferences, User
from app.infrastructure.models import UserModel
from app.utils import now_in_app_naive_datetime


class UserRepository:
    """Provide read and write access to user entities and their preferences."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email.strip().lower())
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_preferences(
        self, user_id: int, preferences: NotificationPreferences
    ) -> User:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        self._apply_preferences_to_model(model, preferences)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_with_daily_reminder(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.daily_reminder.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_with_motivation_messages(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.motivation_messages.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
            notification_preferences=NotificationPreferences(
                daily_reminder=bool(model.daily_reminder),
                reminder_time=model.reminder_time,
                motivation_messages=bool(model.motivation_messages),
                motivation_frequency=model.motivation_frequency,
                push_notifications=bool(model.push_notifications),
            ),
            push_tokens=tuple(token.token for token in model.push_tokens),
        )

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email.strip().lower()
        model.password = user.password
        model.is_active = user.is_active
        UserRepository._apply_preferences_to_model(model, user.notification_preferences)

    @staticmethod
    def _apply_preferences_to_model(
        model: UserModel, preferences: NotificationPreferences
    ) -> None:
        model.daily_reminder = preferences.daily_reminder
        model.reminder_time = preferences.reminder_time
        model.motivation_messages = preferences.motivation_messages
        model.motivation_frequency = preferences.motivation_frequency
        model.push_notifications = preferences.push_notifications


__all__ = ["UserRepository"]
