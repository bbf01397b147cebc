"""Which announcements a user may see, and who receives a new one."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from schoolhub.application.use_cases.teachers import require_teacher_profile
from schoolhub.domain.entities import Announcement, AnnouncementVisibility, User, UserRole
from schoolhub.domain.errors import ForbiddenError
from schoolhub.infrastructure.repositories import (
    AnnouncementRepository,
    TeacherRepository,
    UserRepository,
)


def list_announcements(
    session: Session, *, actor: User, limit: int | None = None
) -> Sequence[Announcement]:
    """Return announcements visible to ``actor``, pinned first then newest.

    Administrators see everything. Teachers see announcements for everyone
    plus department announcements they hold a recipient row for.
    """

    repository = AnnouncementRepository(session)
    if actor.is_admin():
        return repository.list_all(limit=limit)
    require_teacher_profile(actor)
    return repository.list_visible_to(actor.id, limit=limit)


def ensure_can_view(session: Session, announcement: Announcement, *, actor: User) -> None:
    """Raise unless ``actor`` is allowed to open ``announcement``."""

    if actor.is_admin() or announcement.created_by == actor.id:
        return
    require_teacher_profile(actor)
    if announcement.visibility is AnnouncementVisibility.ALL:
        return
    recipient = AnnouncementRepository(session).get_recipient(announcement.id, actor.id)
    if recipient is None:
        raise ForbiddenError("Access denied")


def resolve_recipient_ids(
    session: Session,
    *,
    creator: User,
    visibility: AnnouncementVisibility,
    department: str | None,
) -> list[int]:
    """Compute the users that get a recipient row when an announcement is published.

    ``ALL`` targets every teacher except a teacher author, plus the
    administrators when a teacher wrote it. ``DEPARTMENT`` targets the
    teachers whose profile department matches.
    """

    users = UserRepository(session)
    if visibility is AnnouncementVisibility.DEPARTMENT:
        if not department:
            return []
        return TeacherRepository(session).list_user_ids_by_department(department)

    exclude_id = creator.id if creator.is_teacher() else None
    recipient_ids = users.list_ids_by_role(UserRole.TEACHER, exclude_id=exclude_id)
    if creator.is_teacher():
        recipient_ids.extend(users.list_ids_by_role(UserRole.ADMIN))
    return recipient_ids


__all__ = ["ensure_can_view", "list_announcements", "resolve_recipient_ids"]
