"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .get_user import get_user, list_users
from .reset_password import reset_password

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "get_user",
    "list_users",
    "reset_password",
]
