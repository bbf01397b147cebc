"""Publishing, editing, pinning and deleting announcements."""

from __future__ import annotations

from dataclasses import replace
import logging
from urllib.parse import urlparse

from sqlalchemy.orm import Session

from schoolhub.application.use_cases.uploads import (
    ALLOWED_ANNOUNCEMENT_TYPES,
    UploadedFile,
    build_stored_name,
    validate_upload,
)
from schoolhub.domain.entities import Announcement, AnnouncementVisibility, User
from schoolhub.domain.errors import ForbiddenError, InvalidInputError, NotFoundError
from schoolhub.infrastructure import storage
from schoolhub.infrastructure.repositories import AnnouncementRepository
from schoolhub.utils import now_utc, sanitize_html

from .visibility import resolve_recipient_ids

ATTACHMENT_FOLDER = "announcements"

logger = logging.getLogger(__name__)


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _clean_link(link: str | None) -> str | None:
    cleaned = (link or "").strip() or None
    if cleaned is not None and not _is_valid_url(cleaned):
        raise InvalidInputError("Invalid URL format")
    return cleaned


def _required(value: str | None, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInputError(f"{label} is required")
    return cleaned


def _store_attachment(attachment: UploadedFile) -> str:
    mime_type = validate_upload(
        attachment.content_type, len(attachment.data), ALLOWED_ANNOUNCEMENT_TYPES
    )
    return storage.save_file(
        ATTACHMENT_FOLDER,
        build_stored_name(attachment.filename),
        attachment.data,
        content_type=mime_type,
    )


def _get_manageable(session: Session, announcement_id: int, actor: User, action: str) -> Announcement:
    announcement = AnnouncementRepository(session).get(announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    if not announcement.can_be_managed_by(actor):
        raise ForbiddenError(f"You can only {action} your own announcements")
    return announcement


def create_announcement(
    session: Session,
    *,
    actor: User,
    title: str,
    body: str,
    visibility: AnnouncementVisibility = AnnouncementVisibility.ALL,
    department: str | None = None,
    link: str | None = None,
    attachment: UploadedFile | None = None,
) -> Announcement:
    """Publish an announcement and materialise its recipient rows."""

    if not (actor.is_admin() or actor.is_teacher()):
        raise ForbiddenError("Only admins and teachers can create announcements")

    department = (department or "").strip() or None
    if visibility is AnnouncementVisibility.DEPARTMENT and department is None:
        raise InvalidInputError("Department is required for department announcements")
    if visibility is AnnouncementVisibility.ALL:
        department = None

    announcement = Announcement(
        id=None,
        title=_required(title, "Title"),
        body=sanitize_html(_required(body, "Body")),
        visibility=visibility,
        department=department,
        link=_clean_link(link),
        created_by=actor.id,
        created_at=now_utc(),
    )
    recipient_ids = resolve_recipient_ids(
        session, creator=actor, visibility=visibility, department=department
    )
    if attachment is not None:
        announcement.attachment = _store_attachment(attachment)
    try:
        return AnnouncementRepository(session).create(announcement, recipient_ids)
    except Exception:
        if announcement.attachment:
            storage.delete_file(announcement.attachment)
        raise


def update_announcement(
    session: Session,
    announcement_id: int,
    *,
    actor: User,
    title: str | None = None,
    body: str | None = None,
    visibility: AnnouncementVisibility | None = None,
    department: str | None = None,
    link: str | None = None,
    attachment: UploadedFile | None = None,
) -> Announcement:
    """Apply a partial update.

    ``link=""`` clears the link, ``None`` leaves it untouched. Changing the
    audience resyncs the recipient rows: newly targeted users get an unread
    row, users no longer targeted lose theirs and the others keep their state.
    """

    current = _get_manageable(session, announcement_id, actor, "edit")
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = _required(title, "Title")
    if body is not None:
        changes["body"] = sanitize_html(_required(body, "Body"))
    if link is not None:
        changes["link"] = _clean_link(link)

    new_visibility = visibility or current.visibility
    new_department = current.department
    if department is not None:
        new_department = department.strip() or None
    if new_visibility is AnnouncementVisibility.ALL:
        new_department = None
    elif new_department is None:
        raise InvalidInputError("Department is required for department announcements")
    changes["visibility"] = new_visibility
    changes["department"] = new_department

    recipient_ids = None
    audience_changed = (
        new_visibility is not current.visibility or new_department != current.department
    )
    if audience_changed:
        recipient_ids = resolve_recipient_ids(
            session,
            creator=current.creator or actor,
            visibility=new_visibility,
            department=new_department,
        )
        logger.info(
            "Audience of announcement %s changed to %s %s",
            announcement_id,
            new_visibility.value,
            new_department or "",
        )

    old_attachment = current.attachment
    if attachment is not None:
        changes["attachment"] = _store_attachment(attachment)
    try:
        updated = AnnouncementRepository(session).update(
            replace(current, **changes),
            recipient_ids=recipient_ids,
            keep_user_ids=[current.created_by],
        )
    except Exception:
        if attachment is not None:
            storage.delete_file(changes["attachment"])
        raise
    if attachment is not None and old_attachment:
        storage.delete_file(old_attachment)
    return updated


def delete_announcement(session: Session, announcement_id: int, *, actor: User) -> None:
    """Delete the announcement, its recipient rows and its attachment."""

    announcement = _get_manageable(session, announcement_id, actor, "delete")
    AnnouncementRepository(session).delete(announcement_id)
    if announcement.attachment:
        storage.delete_file(announcement.attachment)


def toggle_pin(session: Session, announcement_id: int, *, actor: User) -> Announcement:
    announcement = AnnouncementRepository(session).get(announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    if not announcement.can_be_managed_by(actor):
        raise ForbiddenError("Access denied")
    return AnnouncementRepository(session).update(
        replace(announcement, pinned=not announcement.pinned)
    )


__all__ = [
    "create_announcement",
    "delete_announcement",
    "toggle_pin",
    "update_announcement",
]
