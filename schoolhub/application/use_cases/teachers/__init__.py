"""Use cases for managing teacher profiles."""

from .manage_teachers import (
    create_teacher,
    delete_teacher,
    get_teacher,
    list_teachers,
    require_teacher_profile,
    update_teacher,
)

__all__ = [
    "create_teacher",
    "delete_teacher",
    "get_teacher",
    "list_teachers",
    "require_teacher_profile",
    "update_teacher",
]
