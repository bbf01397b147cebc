"""Message threads: resolution, replies and thread-wide read state.

Every message belongs to exactly one thread, identified by
``thread_id`` (roots use their own id). Rows written before threading have
``thread_id = NULL``; :func:`normalize_thread_ids` rewrites them at start-up and
:func:`reply_to_message` fixes a legacy parent before replying to it.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Message, User
from schoolhub.domain.errors import ForbiddenError, InvalidInputError, NotFoundError
from schoolhub.infrastructure.repositories import MessageRepository
from schoolhub.utils import now_utc, sanitize_html

REPLY_PREFIX = "Re:"

logger = logging.getLogger(__name__)


def _get_participating(session: Session, message_id: int, actor: User) -> Message:
    message = MessageRepository(session).get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    if not message.is_participant(actor.id):
        raise ForbiddenError("Access denied")
    return message


def reply_subject(subject: str) -> str:
    if subject.lower().startswith(REPLY_PREFIX.lower()):
        return subject
    return f"{REPLY_PREFIX} {subject}"


def resolve_thread(session: Session, message_id: int) -> Sequence[Message]:
    """Return every message sharing the thread of ``message_id``, oldest first."""

    message = MessageRepository(session).get(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    return MessageRepository(session).list_thread(message.effective_thread_id)


def get_thread(session: Session, message_id: int, *, actor: User) -> Sequence[Message]:
    """Return the thread of ``message_id`` after marking the caller's unread messages read."""

    message = _get_participating(session, message_id, actor)
    repository = MessageRepository(session)
    updated = repository.mark_thread_read(
        message.effective_thread_id, recipient_id=actor.id, read_at=now_utc()
    )
    if updated:
        logger.debug(
            "Marked %s messages of thread %s read for user %s",
            updated,
            message.effective_thread_id,
            actor.id,
        )
    return repository.list_thread(message.effective_thread_id)


def reply_to_message(
    session: Session, message_id: int, *, actor: User, body: str
) -> Message:
    """Create a reply in the thread of ``message_id``.

    The reply goes to whichever participant of the parent is not ``actor``.
    """

    cleaned_body = (body or "").strip()
    if not cleaned_body:
        raise InvalidInputError("Reply body is required")

    parent = _get_participating(session, message_id, actor)
    repository = MessageRepository(session)
    if parent.thread_id is None:
        repository.assign_thread_id(parent.id, parent.id)

    reply = Message(
        id=None,
        subject=reply_subject(parent.subject),
        body=sanitize_html(cleaned_body),
        sender_id=actor.id,
        recipient_id=parent.counterpart_of(actor.id),
        parent_message_id=parent.id,
        thread_id=parent.effective_thread_id,
        created_at=now_utc(),
    )
    return repository.create(reply)


def mark_thread_read(session: Session, thread_id: int, *, actor: User) -> int:
    """Mark the caller's unread messages of ``thread_id`` read; return how many changed."""

    repository = MessageRepository(session)
    messages = repository.list_thread(thread_id)
    if not messages:
        raise NotFoundError("Thread not found")
    if not any(message.is_participant(actor.id) for message in messages):
        raise ForbiddenError("Access denied")
    return repository.mark_thread_read(thread_id, recipient_id=actor.id, read_at=now_utc())


def normalize_thread_ids(session: Session) -> int:
    """Give legacy thread roots their own id as ``thread_id``."""

    updated = MessageRepository(session).normalize_thread_ids()
    if updated:
        logger.info("Normalized thread id of %s legacy messages", updated)
    return updated


__all__ = [
    "get_thread",
    "mark_thread_read",
    "normalize_thread_ids",
    "reply_subject",
    "reply_to_message",
    "resolve_thread",
]
