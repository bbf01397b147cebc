"""Repository implementations for infrastructure layer."""

from .announcement_repository import AnnouncementRepository
from .document_repository import DocumentRepository
from .folder_repository import FolderRepository
from .message_repository import MessageRepository
from .teacher_repository import TeacherRepository
from .user_repository import UserRepository

__all__ = [
    "AnnouncementRepository",
    "DocumentRepository",
    "FolderRepository",
    "MessageRepository",
    "TeacherRepository",
    "UserRepository",
]
