"""ORM models used by the application infrastructure."""

from .announcement import AnnouncementModel, AnnouncementRecipientModel
from .document import DocumentModel
from .folder import FolderModel
from .message import MessageModel
from .teacher import TeacherModel
from .user import UserModel

__all__ = [
    "AnnouncementModel",
    "AnnouncementRecipientModel",
    "DocumentModel",
    "FolderModel",
    "MessageModel",
    "TeacherModel",
    "UserModel",
]
