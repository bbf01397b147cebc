"""SQLAlchemy models for announcements and their recipients."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from schoolhub.domain.entities import AnnouncementVisibility
from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class AnnouncementModel(Base):
    """Database representation of a published announcement."""

    __tablename__ = "announcement"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    visibility = Column(
        Enum(AnnouncementVisibility, native_enum=False, length=20),
        nullable=False,
        default=AnnouncementVisibility.ALL,
    )
    department = Column(String(120), nullable=True)
    pinned = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    attachment = Column(String(500), nullable=True)
    link = Column(String(500), nullable=True)
    created_by = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=now_utc_naive, index=True)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)

    creator = relationship("UserModel", lazy="joined")
    recipients = relationship(
        "AnnouncementRecipientModel",
        back_populates="announcement",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AnnouncementRecipientModel(Base):
    """Read state of an announcement for one user, keyed by both ids."""

    __tablename__ = "announcement_recipient"

    announcement_id = Column(
        Integer,
        ForeignKey("announcement.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    read_at = Column(DateTime, nullable=True)

    announcement = relationship("AnnouncementModel", back_populates="recipients")
    user = relationship("UserModel", lazy="joined")


__all__ = ["AnnouncementModel", "AnnouncementRecipientModel"]
