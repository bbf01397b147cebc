"""SQLAlchemy model for document folders."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from schoolhub.infrastructure.database import Base
from schoolhub.utils import now_utc_naive


class FolderModel(Base):
    """Database representation of a folder in the document tree."""

    __tablename__ = "folder"
    __table_args__ = (UniqueConstraint("parent_id", "name", name="uq_folder_parent_name"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    parent_id = Column(Integer, ForeignKey("folder.id"), nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)


__all__ = ["FolderModel"]
