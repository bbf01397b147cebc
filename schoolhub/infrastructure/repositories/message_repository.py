"""Persistence helpers for direct messages and their threads."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_, update
from sqlalchemy.orm import Session

from schoolhub.domain.entities import Message
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import MessageModel
from schoolhub.utils import ensure_utc, ensure_utc_naive, now_utc_naive

from .user_repository import UserRepository


class MessageRepository:
    """Provide CRUD, thread lookup and read-state updates for messages."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._to_entity(model) if model else None

    def list_inbox(self, user_id: int, *, limit: int | None = None) -> Sequence[Message]:
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.recipient_id == user_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_sent(self, user_id: int) -> Sequence[Message]:
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.sender_id == user_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_unread(self, user_id: int, *, limit: int | None = None) -> Sequence[Message]:
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.recipient_id == user_id)
            .filter(MessageModel.read.is_(False))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(func.count(MessageModel.id))
            .filter(MessageModel.recipient_id == user_id)
            .filter(MessageModel.read.is_(False))
            .scalar()
            or 0
        )

    def list_thread(self, thread_id: int) -> Sequence[Message]:
        """Return every message of ``thread_id`` oldest first.

        Matching on ``id`` as well picks up a legacy root whose ``thread_id``
        was never set. A reply id is not a thread id and matches nothing.
        """

        query = (
            self.session.query(MessageModel)
            .filter(self._in_thread(thread_id))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, message: Message) -> Message:
        """Persist ``message``; roots get ``thread_id`` set to their own id."""

        model = MessageModel(
            subject=message.subject,
            body=message.body,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            read=False,
            read_at=None,
            parent_message_id=message.parent_message_id,
            thread_id=message.thread_id,
            created_at=ensure_utc_naive(message.created_at) or now_utc_naive(),
        )
        self.session.add(model)
        self.session.flush()
        if model.thread_id is None:
            model.thread_id = model.id
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def assign_thread_id(self, message_id: int, thread_id: int) -> None:
        self.session.execute(
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .where(MessageModel.thread_id.is_(None))
            .values(thread_id=thread_id)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()

    def normalize_thread_ids(self) -> int:
        """Give every legacy root its own id as ``thread_id``; return rows changed."""

        result = self.session.execute(
            update(MessageModel)
            .where(MessageModel.thread_id.is_(None))
            .values(thread_id=MessageModel.id)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount or 0

    def mark_read(self, message_id: int, *, read_at: datetime) -> bool:
        """Flip ``read`` to true only if it is currently false.

        Returns ``True`` when this call performed the transition, so
        ``read_at`` keeps the time of the first read.
        """

        result = self.session.execute(
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .where(MessageModel.read.is_(False))
            .values(read=True, read_at=ensure_utc_naive(read_at))
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return bool(result.rowcount)

    def mark_thread_read(
        self, thread_id: int, *, recipient_id: int, read_at: datetime
    ) -> int:
        """Mark the unread messages of a thread addressed to ``recipient_id``."""

        ids = [
            message_id
            for (message_id,) in self.session.query(MessageModel.id)
            .filter(self._in_thread(thread_id))
            .filter(MessageModel.recipient_id == recipient_id)
            .filter(MessageModel.read.is_(False))
            .all()
        ]
        if not ids:
            return 0
        result = self.session.execute(
            update(MessageModel)
            .where(MessageModel.id.in_(ids))
            .where(MessageModel.read.is_(False))
            .values(read=True, read_at=ensure_utc_naive(read_at))
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount or 0

    def delete(self, message_id: int) -> None:
        model = self.session.get(MessageModel, message_id)
        if model is None:
            msg = f"Message with id {message_id} not found"
            raise NotFoundError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _in_thread(thread_id: int):
        return or_(
            MessageModel.thread_id == thread_id,
            and_(MessageModel.id == thread_id, MessageModel.thread_id.is_(None)),
        )

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            subject=model.subject,
            body=model.body,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            read=model.read,
            read_at=ensure_utc(model.read_at),
            parent_message_id=model.parent_message_id,
            thread_id=model.thread_id,
            created_at=ensure_utc(model.created_at),
            sender=UserRepository.to_entity(model.sender) if model.sender else None,
            recipient=UserRepository.to_entity(model.recipient) if model.recipient else None,
        )


__all__ = ["MessageRepository"]
