"""Dashboard route."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.dashboard import AdminDashboard, get_dashboard
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user
from schoolhub.interfaces.api.schemas import (
    AdminDashboardRead,
    AdminStatsRead,
    AnnouncementRead,
    DocumentRead,
    MessageRead,
    TeacherDashboardRead,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=AdminDashboardRead | TeacherDashboardRead)
def read_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AdminDashboardRead | TeacherDashboardRead:
    """Return statistics for administrators or the personal overview of a teacher."""

    dashboard = get_dashboard(db, actor=current_user)
    if isinstance(dashboard, AdminDashboard):
        return AdminDashboardRead(
            stats=AdminStatsRead(
                teacher_count=dashboard.teacher_count,
                total_users=dashboard.total_users,
                total_teachers=dashboard.total_teachers,
                total_announcements=dashboard.total_announcements,
                total_documents=dashboard.total_documents,
            ),
            latest_announcements=[
                AnnouncementRead.from_entity(item) for item in dashboard.latest_announcements
            ],
            recent_documents=[DocumentRead.from_entity(item) for item in dashboard.recent_documents],
        )
    return TeacherDashboardRead(
        unread_messages=dashboard.unread_messages,
        announcements=[
            AnnouncementRead.from_entity(item, current_user) for item in dashboard.announcements
        ],
        recent_messages=[MessageRead.from_entity(item) for item in dashboard.recent_messages],
    )
