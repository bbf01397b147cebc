"""Use cases for teacher profiles attached to ``TEACHER`` users."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Teacher, TeacherStatus, User, UserRole
from schoolhub.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from schoolhub.infrastructure.repositories import TeacherRepository, UserRepository

_EDITABLE_FIELDS = ("name", "department", "position", "phone", "status")


def _required_text(value: str | None, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{label} is required")
    return cleaned


def list_teachers(session: Session) -> Sequence[tuple[Teacher, User]]:
    return TeacherRepository(session).list()


def get_teacher(session: Session, teacher_id: int) -> tuple[Teacher, User]:
    found = TeacherRepository(session).get(teacher_id)
    if found is None:
        raise NotFoundError("Teacher not found")
    return found


def require_teacher_profile(user: User) -> Teacher:
    """Return the caller's profile, refusing teachers that have none."""

    if user.teacher_profile is None:
        raise ForbiddenError("Teacher profile not found")
    return user.teacher_profile


def create_teacher(
    session: Session,
    *,
    user_id: int,
    name: str,
    department: str,
    position: str,
    phone: str | None = None,
    status: TeacherStatus = TeacherStatus.ACTIVE,
) -> tuple[Teacher, User]:
    """Attach a teacher profile to an existing ``TEACHER`` account."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.role is not UserRole.TEACHER:
        raise InvalidInputError("User must have TEACHER role")

    repository = TeacherRepository(session)
    if repository.get_by_user_id(user_id) is not None:
        raise ConflictError("Teacher profile already exists for this user")

    teacher = repository.create(
        Teacher(
            id=None,
            user_id=user_id,
            name=_required_text(name, "Name"),
            department=_required_text(department, "Department"),
            position=_required_text(position, "Position"),
            phone=(phone or "").strip() or None,
            status=status,
        )
    )
    return get_teacher(session, teacher.id)


def update_teacher(session: Session, teacher_id: int, **changes) -> tuple[Teacher, User]:
    """Apply a partial update; unknown or ``None`` fields are ignored."""

    teacher, _ = get_teacher(session, teacher_id)
    updates = {
        field: value
        for field, value in changes.items()
        if field in _EDITABLE_FIELDS and value is not None
    }
    for label, field in (("Name", "name"), ("Department", "department"), ("Position", "position")):
        if field in updates:
            updates[field] = _required_text(updates[field], label)

    TeacherRepository(session).update(replace(teacher, **updates))
    return get_teacher(session, teacher_id)


def delete_teacher(session: Session, teacher_id: int) -> None:
    get_teacher(session, teacher_id)
    TeacherRepository(session).delete(teacher_id)
