"""Use case for creating users."""

from sqlalchemy.orm import Session

from schoolhub.domain.entities import User, UserRole
from schoolhub.domain.errors import ConflictError
from schoolhub.infrastructure.repositories import UserRepository
from schoolhub.infrastructure.security import get_password_hash
from schoolhub.utils import now_utc

from .validators import ensure_valid_password, normalize_email


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    role: UserRole,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if repository.get_by_email(normalized_email):
        raise ConflictError("User already exists")

    user = User(
        id=None,
        email=normalized_email,
        password=get_password_hash(ensure_valid_password(password)),
        role=role,
        created_at=now_utc(),
    )
    return repository.create(user)
