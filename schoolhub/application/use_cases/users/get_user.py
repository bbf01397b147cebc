"""Use cases for reading users."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from schoolhub.domain.entities import User
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(session: Session) -> Sequence[User]:
    return UserRepository(session).list()
