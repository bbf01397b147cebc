"""Domain entity representing a direct message between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User


@dataclass
class Message:
    """A message belonging to exactly one thread.

    The thread is identified by ``thread_id`` or, for rows stored before
    threading existed, by the message's own ``id``.
    """

    id: int | None
    subject: str
    body: str
    sender_id: int
    recipient_id: int
    read: bool = False
    read_at: datetime | None = None
    parent_message_id: int | None = None
    thread_id: int | None = None
    created_at: datetime | None = None
    sender: User | None = None
    recipient: User | None = None

    @property
    def effective_thread_id(self) -> int:
        if self.thread_id is not None:
            return self.thread_id
        if self.id is None:
            raise ValueError("Unsaved messages have no thread")
        return self.id

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.sender_id, self.recipient_id)

    def counterpart_of(self, user_id: int) -> int:
        """Return the participant that is not ``user_id``."""

        if user_id == self.recipient_id:
            return self.sender_id
        if user_id == self.sender_id:
            return self.recipient_id
        raise ValueError(f"User {user_id} does not take part in message {self.id}")


__all__ = ["Message"]
