"""Inbox, sent box and single-message operations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Message, User, UserRole
from schoolhub.domain.errors import ForbiddenError, InvalidInputError, NotFoundError
from schoolhub.infrastructure.repositories import MessageRepository, UserRepository
from schoolhub.utils import now_utc, sanitize_html


def list_inbox(session: Session, *, actor: User) -> Sequence[Message]:
    return MessageRepository(session).list_inbox(actor.id)


def list_sent(session: Session, *, actor: User) -> Sequence[Message]:
    # Administrators never start conversations, their sent box only holds replies.
    return MessageRepository(session).list_sent(actor.id)


def count_unread(session: Session, *, actor: User) -> int:
    return MessageRepository(session).count_unread(actor.id)


def list_contacts(session: Session, *, actor: User) -> Sequence[User]:
    """Users ``actor`` may start a conversation with."""

    if actor.is_admin():
        return []
    return UserRepository(session).list_messaging_contacts(actor.id)


def get_message(session: Session, message_id: int, *, actor: User) -> Message:
    """Return the message; opening it as its recipient marks it read."""

    repository = MessageRepository(session)
    message = repository.get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    if not message.is_participant(actor.id):
        raise ForbiddenError("Access denied")
    if message.recipient_id == actor.id and not message.read:
        repository.mark_read(message_id, read_at=now_utc())
        message = repository.get(message_id)
    return message


def send_message(
    session: Session,
    *,
    actor: User,
    recipient_id: int,
    subject: str,
    body: str,
) -> Message:
    """Start a new thread from a teacher to another teacher or an administrator."""

    if actor.is_admin():
        raise ForbiddenError(
            "Admins cannot send messages. They can only receive messages from teachers."
        )
    cleaned_subject = (subject or "").strip()
    cleaned_body = (body or "").strip()
    if not cleaned_subject:
        raise InvalidInputError("Subject is required")
    if not cleaned_body:
        raise InvalidInputError("Message body is required")

    recipient = UserRepository(session).get(recipient_id)
    if recipient is None:
        raise NotFoundError("Recipient not found")
    if recipient.id == actor.id:
        raise InvalidInputError("Cannot send message to yourself")
    if recipient.role not in (UserRole.TEACHER, UserRole.ADMIN):
        raise ForbiddenError("Teachers can only send messages to other teachers or admin")

    message = Message(
        id=None,
        subject=cleaned_subject,
        body=sanitize_html(cleaned_body),
        sender_id=actor.id,
        recipient_id=recipient.id,
        created_at=now_utc(),
    )
    return MessageRepository(session).create(message)


def mark_message_read(session: Session, message_id: int, *, actor: User) -> Message:
    """Idempotently mark a received message read, keeping the first ``read_at``."""

    repository = MessageRepository(session)
    message = repository.get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    if message.recipient_id != actor.id:
        raise ForbiddenError("Access denied")
    repository.mark_read(message_id, read_at=now_utc())
    return repository.get(message_id)


def delete_message(session: Session, message_id: int, *, actor: User) -> None:
    repository = MessageRepository(session)
    message = repository.get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    if not message.is_participant(actor.id):
        raise ForbiddenError("Access denied")
    repository.delete(message_id)


__all__ = [
    "count_unread",
    "delete_message",
    "get_message",
    "list_contacts",
    "list_inbox",
    "list_sent",
    "mark_message_read",
    "send_message",
]
