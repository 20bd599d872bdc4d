"""Shared fixtures: a throwaway SQLite database and fake delivery channels."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "flashcards_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["FRONTEND_URL"] = "https://app.example.com"
for name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "FCM_PROJECT_ID",
    "FCM_SERVICE_ACCOUNT_JSON",
    "FCM_SERVICE_ACCOUNT_PATH",
):
    os.environ.pop(name, None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.application.use_cases.notifications import ChannelSenders  # noqa: E402
from app.domain.entities import NotificationPreferences, User  # noqa: E402
from app.domain.exceptions import EmailConfigurationError  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.push import (  # noqa: E402
    PUSH_STATUS_INVALID_TOKEN,
    PUSH_STATUS_SENT,
    PushResult,
)
from app.infrastructure.repositories import (  # noqa: E402
    PushTokenRepository,
    UserRepository,
)
from app.infrastructure.security import get_password_hash  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts with empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeChannels:
    """Records every send and lets tests script failures."""

    def __init__(self) -> None:
        self.emails: list[dict] = []
        self.pushes: list[dict] = []
        self.email_configured = True
        self.push_configured = True
        self.email_error: Exception | None = None
        self.failing_recipients: set[str] = set()
        self.invalid_tokens: set[str] = set()

    def send_email(self, subject, html_content, recipient, *, text_content=None):
        if recipient in self.failing_recipients:
            raise RuntimeError(f"mailbox unavailable for {recipient}")
        if self.email_error is not None:
            raise self.email_error
        self.emails.append(
            {"subject": subject, "html": html_content, "to": recipient, "text": text_content}
        )

    def ensure_email_configured(self):
        if not self.email_configured:
            raise EmailConfigurationError("SendGrid configuration incomplete")

    def send_push(self, tokens, title, body, data=None):
        self.pushes.append({"tokens": list(tokens), "title": title, "body": body, "data": data})
        return [
            PushResult(token=token, status=PUSH_STATUS_INVALID_TOKEN, error="UNREGISTERED")
            if token in self.invalid_tokens
            else PushResult(token=token, status=PUSH_STATUS_SENT)
            for token in tokens
        ]

    def is_push_configured(self):
        return self.push_configured

    def senders(self, timeout: float | None = 5.0) -> ChannelSenders:
        return ChannelSenders(
            send_email=self.send_email,
            ensure_email_configured=self.ensure_email_configured,
            send_push=self.send_push,
            is_push_configured=self.is_push_configured,
            timeout=timeout,
        )


@pytest.fixture()
def channels() -> FakeChannels:
    return FakeChannels()


@pytest.fixture()
def make_user(session):
    """Create a persisted user with the given preferences and push tokens."""

    counter = {"value": 0}

    def _make_user(
        *,
        name: str = "Ada",
        email: str | None = None,
        password: str = "correct-horse",
        tokens: tuple[str, ...] = (),
        **preferences,
    ) -> User:
        counter["value"] += 1
        email = email or f"user{counter['value']}@example.com"
        user = UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=email,
                password=get_password_hash(password),
                is_active=True,
                created_at=None,
                updated_at=None,
                notification_preferences=NotificationPreferences(**preferences),
            )
        )
        token_repository = PushTokenRepository(session)
        for token in tokens:
            token_repository.add(user.id, token)
        return UserRepository(session).get(user.id)

    return _make_user

