"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .role import UserRole
from .teacher import Teacher


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    email: str
    password: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None
    teacher_profile: Teacher | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role is UserRole.ADMIN

    def is_teacher(self) -> bool:
        return self.role is UserRole.TEACHER

    @property
    def display_name(self) -> str:
        """Teacher name when a profile exists, otherwise the e-mail address."""

        if self.teacher_profile is not None:
            return self.teacher_profile.name
        return self.email


__all__ = ["User"]
