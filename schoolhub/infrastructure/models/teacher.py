"""SQLAlchemy model for teacher profiles."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String

from sqlalchemy.orm import relationship

from schoolhub.domain.entities import TeacherStatus
from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class TeacherModel(Base):
    """Staff profile linked one-to-one with a ``TEACHER`` user."""

    __tablename__ = "teacher"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name = Column(String(120), nullable=False)
    department = Column(String(120), nullable=False, index=True)
    position = Column(String(120), nullable=False)
    phone = Column(String(40), nullable=True)
    status = Column(
        Enum(TeacherStatus, native_enum=False, length=20),
        nullable=False,
        default=TeacherStatus.ACTIVE,
    )
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)

    user = relationship("UserModel", back_populates="teacher_profile")


__all__ = ["TeacherModel"]
