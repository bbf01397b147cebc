"""Read statistics of an announcement for its author and administrators."""

from sqlalchemy.orm import Session

from schoolhub.domain.entities import AnnouncementEngagement, User
from schoolhub.domain.errors import ForbiddenError, NotFoundError
from schoolhub.infrastructure.repositories import AnnouncementRepository


def get_announcement_engagement(
    session: Session, announcement_id: int, *, actor: User
) -> AnnouncementEngagement:
    repository = AnnouncementRepository(session)
    announcement = repository.get(announcement_id)
    if announcement is None:
        raise NotFoundError("Announcement not found")
    if not announcement.can_be_managed_by(actor):
        raise ForbiddenError("Access denied")

    # Ordered by read_at descending with unread rows last.
    recipients = repository.list_recipients(announcement_id)
    return AnnouncementEngagement(
        read_by=[recipient for recipient in recipients if recipient.read],
        unread_by=[recipient for recipient in recipients if not recipient.read],
    )


__all__ = ["get_announcement_engagement"]
