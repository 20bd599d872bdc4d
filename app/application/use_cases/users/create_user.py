"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_naive_datetime

from .validators import ensure_valid_password


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Create a new user ensuring unique email addresses.

    New accounts start with the default notification preferences: reminders
    and motivation messages off, push on.
    """

    repository = UserRepository(session)

    if repository.get_by_email(email):
        raise ValueError("Email is already registered")

    name = name.strip()
    if not name:
        raise ValueError("Name is required")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(ensure_valid_password(password)),
        is_active=True,
        created_at=now_in_app_naive_datetime(),
        updated_at=None,
    )

    return repository.create(user)
