"""Use case for administrators resetting another user's password."""

import logging

from sqlalchemy.orm import Session

from schoolhub.domain.entities import User
from schoolhub.infrastructure.repositories import UserRepository
from schoolhub.infrastructure.security import get_password_hash

from .get_user import get_user
from .validators import ensure_valid_password

logger = logging.getLogger(__name__)


def reset_password(session: Session, *, user_id: int, new_password: str) -> User:
    """Store a new password hash; tokens issued before the reset stop working."""

    ensure_valid_password(new_password)
    get_user(session, user_id)
    user = UserRepository(session).update_password(user_id, get_password_hash(new_password))
    logger.info("Password reset for user %s", user_id)
    return user
