"""Domain entities for announcements and their per-user read tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .user import User


class AnnouncementVisibility(str, Enum):
    """Audience of an announcement."""

    ALL = "ALL"
    DEPARTMENT = "DEPARTMENT"


@dataclass
class AnnouncementRecipient:
    """Read state of one announcement for one user.

    A missing row is equivalent to ``read=False``.
    """

    announcement_id: int
    user_id: int
    read: bool = False
    read_at: datetime | None = None
    user: User | None = None


@dataclass
class Announcement:
    """Broadcast message published by an administrator or a teacher."""

    id: int | None
    title: str
    body: str
    visibility: AnnouncementVisibility
    created_by: int
    department: str | None = None
    pinned: bool = False
    attachment: str | None = None
    link: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    creator: User | None = None
    recipients: list[AnnouncementRecipient] = field(default_factory=list)

    def recipient_for(self, user_id: int) -> AnnouncementRecipient | None:
        """Return the loaded recipient row of ``user_id`` if any."""

        for recipient in self.recipients:
            if recipient.user_id == user_id:
                return recipient
        return None

    def is_read_by(self, user_id: int) -> bool:
        recipient = self.recipient_for(user_id)
        return recipient is not None and recipient.read

    def can_be_managed_by(self, user: User) -> bool:
        """Administrators manage every announcement, teachers only their own."""

        return user.is_admin() or self.created_by == user.id


@dataclass
class AnnouncementEngagement:
    """Aggregate read statistics over an announcement's recipients."""

    read_by: list[AnnouncementRecipient]
    unread_by: list[AnnouncementRecipient]

    @property
    def total_recipients(self) -> int:
        return len(self.read_by) + len(self.unread_by)

    @property
    def read_count(self) -> int:
        return len(self.read_by)

    @property
    def unread_count(self) -> int:
        return len(self.unread_by)

    @property
    def read_percentage(self) -> int:
        """Rounded share of recipients who read, ``0`` when nobody was targeted."""

        if self.total_recipients == 0:
            return 0
        return round(self.read_count / self.total_recipients * 100)


__all__ = [
    "Announcement",
    "AnnouncementEngagement",
    "AnnouncementRecipient",
    "AnnouncementVisibility",
]
