"""Domain entity representing a document folder."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Folder:
    """Named container for documents; folders nest through ``parent_id``."""

    id: int | None
    name: str
    parent_id: int | None
    created_by: int
    created_at: datetime | None = None


__all__ = ["Folder"]
