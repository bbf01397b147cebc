"""Domain entity representing a teacher profile."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TeacherStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass
class Teacher:
    """Staff details attached to a user with the ``TEACHER`` role."""

    id: int | None
    user_id: int
    name: str
    department: str
    position: str
    phone: str | None = None
    status: TeacherStatus = TeacherStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Teacher", "TeacherStatus"]
