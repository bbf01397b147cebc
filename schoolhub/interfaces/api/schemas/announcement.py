"""Announcement schemas."""

from datetime import datetime

from pydantic import BaseModel

from schoolhub.domain.entities import (
    Announcement,
    AnnouncementEngagement,
    AnnouncementRecipient,
    AnnouncementVisibility,
    User,
)


class AnnouncementRead(BaseModel):
    id: int
    title: str
    body: str
    visibility: AnnouncementVisibility
    department: str | None = None
    pinned: bool
    attachment: str | None = None
    link: str | None = None
    created_by: int
    creator_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_read: bool | None = None
    read_at: datetime | None = None

    @classmethod
    def from_entity(cls, announcement: Announcement, viewer: User | None = None) -> "AnnouncementRead":
        """Build the read model; teachers also get their own read state."""

        is_read = None
        read_at = None
        if viewer is not None and not viewer.is_admin():
            recipient = announcement.recipient_for(viewer.id)
            is_read = recipient is not None and recipient.read
            read_at = recipient.read_at if recipient else None
        return cls(
            id=announcement.id,
            title=announcement.title,
            body=announcement.body,
            visibility=announcement.visibility,
            department=announcement.department,
            pinned=announcement.pinned,
            attachment=announcement.attachment,
            link=announcement.link,
            created_by=announcement.created_by,
            creator_name=announcement.creator.display_name if announcement.creator else None,
            created_at=announcement.created_at,
            updated_at=announcement.updated_at,
            is_read=is_read,
            read_at=read_at,
        )


class RecipientRead(BaseModel):
    user_id: int
    name: str | None = None
    email: str | None = None
    department: str | None = None
    read: bool
    read_at: datetime | None = None

    @classmethod
    def from_entity(cls, recipient: AnnouncementRecipient) -> "RecipientRead":
        user = recipient.user
        profile = user.teacher_profile if user else None
        return cls(
            user_id=recipient.user_id,
            name=user.display_name if user else None,
            email=user.email if user else None,
            department=profile.department if profile else None,
            read=recipient.read,
            read_at=recipient.read_at,
        )


class AnnouncementDetailRead(AnnouncementRead):
    recipients: list[RecipientRead] = []

    @classmethod
    def from_entity(cls, announcement: Announcement, viewer: User | None = None) -> "AnnouncementDetailRead":
        base = AnnouncementRead.from_entity(announcement, viewer)
        return cls(
            **base.model_dump(),
            recipients=[RecipientRead.from_entity(row) for row in announcement.recipients],
        )


class AnnouncementReadState(BaseModel):
    announcement_id: int
    read: bool
    updated: bool


class EngagementRead(BaseModel):
    total_recipients: int
    read_count: int
    unread_count: int
    read_percentage: int
    read_by: list[RecipientRead]
    unread_by: list[RecipientRead]

    @classmethod
    def from_entity(cls, engagement: AnnouncementEngagement) -> "EngagementRead":
        return cls(
            total_recipients=engagement.total_recipients,
            read_count=engagement.read_count,
            unread_count=engagement.unread_count,
            read_percentage=engagement.read_percentage,
            read_by=[RecipientRead.from_entity(row) for row in engagement.read_by],
            unread_by=[RecipientRead.from_entity(row) for row in engagement.unread_by],
        )
