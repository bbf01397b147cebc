"""Common validation helpers for user use cases."""

from schoolhub.domain.errors import InvalidInputError

MIN_PASSWORD_LENGTH = 8


def ensure_valid_password(password: str | None) -> str:
    """Return ``password`` or raise when it is shorter than the minimum."""

    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return password


def normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    local_part, _, domain = normalized.partition("@")
    if normalized.count("@") != 1 or not local_part or not domain:
        raise InvalidInputError("Invalid email address")
    return normalized
