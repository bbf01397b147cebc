"""Domain entity representing an uploaded document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User


@dataclass
class Document:
    """Metadata of a file stored through the storage backend."""

    id: int | None
    title: str
    category: str
    file_path: str
    file_name: str
    file_size: int
    mime_type: str
    uploaded_by: int
    description: str | None = None
    folder_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    uploader: User | None = None


__all__ = ["Document"]
