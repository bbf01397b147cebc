"""Message, thread and notification schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schoolhub.domain.entities import Message

from .user import UserSummaryRead


class MessageCreate(BaseModel):
    recipient_id: int = Field(..., ge=1)
    subject: str = Field(..., max_length=200)
    body: str


class ReplyCreate(BaseModel):
    body: str


class MessageRead(BaseModel):
    id: int
    subject: str
    body: str
    sender_id: int
    recipient_id: int
    read: bool
    read_at: datetime | None = None
    parent_message_id: int | None = None
    thread_id: int
    created_at: datetime | None = None
    sender: UserSummaryRead | None = None
    recipient: UserSummaryRead | None = None

    @classmethod
    def from_entity(cls, message: Message) -> "MessageRead":
        return cls(
            id=message.id,
            subject=message.subject,
            body=message.body,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            read=message.read,
            read_at=message.read_at,
            parent_message_id=message.parent_message_id,
            thread_id=message.effective_thread_id,
            created_at=message.created_at,
            sender=UserSummaryRead.from_entity(message.sender) if message.sender else None,
            recipient=(
                UserSummaryRead.from_entity(message.recipient) if message.recipient else None
            ),
        )


class UnreadCountRead(BaseModel):
    count: int


class ThreadReadResult(BaseModel):
    thread_id: int
    updated: int


class NotificationRead(BaseModel):
    id: int
    type: str
    title: str
    body: str
    sender: str
    created_at: datetime | None = None
    read: bool

    model_config = ConfigDict(from_attributes=True)


class NotificationFeedRead(BaseModel):
    notifications: list[NotificationRead]
    unread_messages: int
    unread_announcements: int
    total_unread: int

    model_config = ConfigDict(from_attributes=True)
