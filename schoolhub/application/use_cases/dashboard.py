"""Use case assembling the landing page data for each role."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Announcement, Document, Message, TeacherStatus, User
from schoolhub.infrastructure.repositories import (
    AnnouncementRepository,
    DocumentRepository,
    MessageRepository,
    TeacherRepository,
    UserRepository,
)

DASHBOARD_LIMIT = 5


@dataclass
class AdminDashboard:
    teacher_count: int
    total_users: int
    total_teachers: int
    total_announcements: int
    total_documents: int
    latest_announcements: list[Announcement] = field(default_factory=list)
    recent_documents: list[Document] = field(default_factory=list)


@dataclass
class TeacherDashboard:
    unread_messages: int
    announcements: list[Announcement] = field(default_factory=list)
    recent_messages: list[Message] = field(default_factory=list)


def get_dashboard(session: Session, *, actor: User) -> AdminDashboard | TeacherDashboard:
    announcements = AnnouncementRepository(session)
    if actor.is_admin():
        teachers = TeacherRepository(session)
        documents = DocumentRepository(session)
        return AdminDashboard(
            teacher_count=teachers.count(status=TeacherStatus.ACTIVE),
            total_users=UserRepository(session).count(),
            total_teachers=teachers.count(),
            total_announcements=announcements.count(),
            total_documents=documents.count(),
            latest_announcements=list(
                announcements.list_all(limit=DASHBOARD_LIMIT, pinned_first=False)
            ),
            recent_documents=list(documents.list(limit=DASHBOARD_LIMIT)),
        )

    messages = MessageRepository(session)
    return TeacherDashboard(
        unread_messages=messages.count_unread(actor.id),
        announcements=list(
            announcements.list_visible_to(actor.id, limit=DASHBOARD_LIMIT, pinned_first=False)
        ),
        recent_messages=list(messages.list_inbox(actor.id, limit=DASHBOARD_LIMIT)),
    )


__all__ = ["AdminDashboard", "TeacherDashboard", "get_dashboard"]
