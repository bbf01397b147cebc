"""SQLAlchemy model for direct messages."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class MessageModel(Base):
    """Database representation of a message and its thread linkage."""

    __tablename__ = "message"

    id = Column(Integer, primary_key=True, index=True)
    subject = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    sender_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime, nullable=True)
    parent_message_id = Column(
        Integer, ForeignKey("message.id", ondelete="SET NULL"), nullable=True
    )
    # NULL only on rows written before threading; see MessageRepository.normalize_thread_ids.
    thread_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive, index=True)

    sender = relationship("UserModel", foreign_keys=[sender_id], lazy="joined")
    recipient = relationship("UserModel", foreign_keys=[recipient_id], lazy="joined")


__all__ = ["MessageModel"]
