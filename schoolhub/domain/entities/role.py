"""Roles a user account can hold."""

from enum import Enum


class UserRole(str, Enum):
    """Coarse permission level attached to every account."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"


__all__ = ["UserRole"]
