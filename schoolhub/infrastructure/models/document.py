"""SQLAlchemy model for uploaded documents."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class DocumentModel(Base):
    """Database representation of a stored document."""

    __tablename__ = "document"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, index=True)
    folder_id = Column(Integer, ForeignKey("folder.id"), nullable=True, index=True)
    file_path = Column(String(500), nullable=False)
    file_name = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False)
    mime_type = Column(String(150), nullable=False)
    uploaded_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive, index=True)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive)

    uploader = relationship("UserModel", lazy="joined")


__all__ = ["DocumentModel"]
