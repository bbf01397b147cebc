"""Dashboard schemas."""

from typing import Literal

from pydantic import BaseModel

from .announcement import AnnouncementRead
from .document import DocumentRead
from .message import MessageRead


class AdminStatsRead(BaseModel):
    teacher_count: int
    total_users: int
    total_teachers: int
    total_announcements: int
    total_documents: int


class AdminDashboardRead(BaseModel):
    role: Literal["ADMIN"] = "ADMIN"
    stats: AdminStatsRead
    latest_announcements: list[AnnouncementRead]
    recent_documents: list[DocumentRead]


class TeacherDashboardRead(BaseModel):
    role: Literal["TEACHER"] = "TEACHER"
    unread_messages: int
    announcements: list[AnnouncementRead]
    recent_messages: list[MessageRead]
