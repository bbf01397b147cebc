"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from schoolhub.domain.entities import UserRole
from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class UserModel(Base):
    """Database representation of an account able to sign in."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, native_enum=False, length=20),
        nullable=False,
        default=UserRole.TEACHER,
    )
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)

    teacher_profile = relationship(
        "TeacherModel",
        back_populates="user",
        uselist=False,
        lazy="joined",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["UserModel"]
