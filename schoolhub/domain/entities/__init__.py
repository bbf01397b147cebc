"""Domain entities exposed by the application."""

from .announcement import (
    Announcement,
    AnnouncementEngagement,
    AnnouncementRecipient,
    AnnouncementVisibility,
)
from .document import Document
from .folder import Folder
from .message import Message
from .role import UserRole
from .teacher import Teacher, TeacherStatus
from .user import User

__all__ = [
    "Announcement",
    "AnnouncementEngagement",
    "AnnouncementRecipient",
    "AnnouncementVisibility",
    "Document",
    "Folder",
    "Message",
    "Teacher",
    "TeacherStatus",
    "User",
    "UserRole",
]
