"""Combined feed of unread messages and announcements for the header bell."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Announcement, Message, User
from schoolhub.infrastructure.repositories import AnnouncementRepository, MessageRepository
from schoolhub.utils import now_utc

FEED_LIMIT = 10
PREVIEW_LENGTH = 100
ADMIN_ANNOUNCEMENT_WINDOW = timedelta(days=7)


@dataclass
class NotificationItem:
    id: int
    type: str
    title: str
    body: str
    sender: str
    created_at: datetime | None
    read: bool


@dataclass
class NotificationFeed:
    notifications: list[NotificationItem] = field(default_factory=list)
    unread_messages: int = 0
    unread_announcements: int = 0

    @property
    def total_unread(self) -> int:
        return self.unread_messages + self.unread_announcements


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[:PREVIEW_LENGTH] + "..."


def _from_message(message: Message) -> NotificationItem:
    return NotificationItem(
        id=message.id,
        type="message",
        title=message.subject,
        body=_preview(message.body),
        sender=message.sender.display_name if message.sender else "",
        created_at=message.created_at,
        read=message.read,
    )


def _from_announcement(announcement: Announcement, user_id: int) -> NotificationItem:
    return NotificationItem(
        id=announcement.id,
        type="announcement",
        title=announcement.title,
        body=_preview(announcement.body),
        sender=announcement.creator.display_name if announcement.creator else "",
        created_at=announcement.created_at,
        read=announcement.is_read_by(user_id),
    )


def get_notifications(session: Session, *, actor: User) -> NotificationFeed:
    """Return up to ten unread messages and ten unread (or, for admins, recent) announcements."""

    messages = MessageRepository(session).list_unread(actor.id, limit=FEED_LIMIT)

    announcements: list[Announcement]
    repository = AnnouncementRepository(session)
    if actor.is_admin():
        since = now_utc() - ADMIN_ANNOUNCEMENT_WINDOW
        announcements = list(repository.list_created_since(since, limit=FEED_LIMIT))
    elif actor.teacher_profile is not None:
        visible = repository.list_visible_to(actor.id, limit=FEED_LIMIT, pinned_first=False)
        announcements = [item for item in visible if not item.is_read_by(actor.id)]
    else:
        announcements = []

    items = [_from_message(message) for message in messages]
    items.extend(_from_announcement(item, actor.id) for item in announcements)
    items.sort(
        key=lambda item: item.created_at or datetime.min.replace(tzinfo=timezone.utc),
        reverse=True,
    )
    return NotificationFeed(
        notifications=items,
        unread_messages=len(messages),
        unread_announcements=len(announcements),
    )


__all__ = ["NotificationFeed", "NotificationItem", "get_notifications"]
