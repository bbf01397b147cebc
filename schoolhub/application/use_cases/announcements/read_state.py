"""Opening announcements and tracking who has read them."""

from __future__ import annotations

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Announcement, User
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.repositories import AnnouncementRepository
from schoolhub.utils import now_utc

from .visibility import ensure_can_view


def _load(session: Session, announcement_id: int) -> Announcement:
    announcement = AnnouncementRepository(session).get(announcement_id, with_recipients=True)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    return announcement


def get_announcement(session: Session, announcement_id: int, *, actor: User) -> Announcement:
    """Return the announcement; opening it as a teacher marks it read.

    Administrators get every recipient row, teachers only their own.
    """

    announcement = _load(session, announcement_id)
    if actor.is_admin():
        return announcement

    ensure_can_view(session, announcement, actor=actor)
    AnnouncementRepository(session).mark_read(announcement_id, actor.id, read_at=now_utc())
    announcement = _load(session, announcement_id)
    own_row = announcement.recipient_for(actor.id)
    announcement.recipients = [own_row] if own_row is not None else []
    return announcement


def mark_announcement_read(session: Session, announcement_id: int, *, actor: User) -> bool:
    """Idempotently mark the announcement read for ``actor``.

    Returns ``True`` only for the call that performed the transition.
    """

    announcement = _load(session, announcement_id)
    ensure_can_view(session, announcement, actor=actor)
    return AnnouncementRepository(session).mark_read(
        announcement_id, actor.id, read_at=now_utc()
    )


__all__ = ["get_announcement", "mark_announcement_read"]
