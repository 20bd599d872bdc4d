"""Common validation helpers for user use cases."""

MIN_PASSWORD_LENGTH = 8


def ensure_valid_password(password: str) -> str:
    """Return ``password`` unchanged or raise ``ValueError`` when too short."""

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters")
    return password
