"""Routes for announcements, their read state and engagement."""

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.announcements import (
    create_announcement as create_announcement_uc,
    delete_announcement as delete_announcement_uc,
    get_announcement as get_announcement_uc,
    get_announcement_engagement as get_announcement_engagement_uc,
    list_announcements as list_announcements_uc,
    mark_announcement_read as mark_announcement_read_uc,
    toggle_pin as toggle_pin_uc,
    update_announcement as update_announcement_uc,
)
from schoolhub.domain.entities import AnnouncementVisibility, User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user
from schoolhub.interfaces.api.routes_helpers import (
    DOMAIN_ERRORS,
    read_upload,
    to_http_exception,
)
from schoolhub.interfaces.api.schemas import (
    AnnouncementDetailRead,
    AnnouncementRead,
    AnnouncementReadState,
    EngagementRead,
)

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("/", response_model=list[AnnouncementRead])
def list_announcements(
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[AnnouncementRead]:
    """Return the announcements visible to the caller, pinned first then newest."""

    try:
        announcements = list_announcements_uc(db, actor=current_user, limit=limit)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return [AnnouncementRead.from_entity(item, current_user) for item in announcements]


@router.get("/{announcement_id}", response_model=AnnouncementDetailRead)
def read_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnnouncementDetailRead:
    """Return one announcement; opening it as a teacher records it as read."""

    try:
        announcement = get_announcement_uc(db, announcement_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return AnnouncementDetailRead.from_entity(announcement, current_user)


@router.post("/", response_model=AnnouncementRead, status_code=status.HTTP_201_CREATED)
def create_announcement(
    title: str = Form(...),
    body: str = Form(...),
    visibility: AnnouncementVisibility = Form(AnnouncementVisibility.ALL),
    department: str | None = Form(None),
    link: str | None = Form(None),
    attachment: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnnouncementRead:
    try:
        announcement = create_announcement_uc(
            db,
            actor=current_user,
            title=title,
            body=body,
            visibility=visibility,
            department=department,
            link=link,
            attachment=read_upload(attachment),
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return AnnouncementRead.from_entity(announcement, current_user)


@router.put("/{announcement_id}", response_model=AnnouncementRead)
def update_announcement(
    announcement_id: int,
    title: str | None = Form(None),
    body: str | None = Form(None),
    visibility: AnnouncementVisibility | None = Form(None),
    department: str | None = Form(None),
    link: str | None = Form(None),
    remove_link: bool = Form(False),
    attachment: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnnouncementRead:
    """Partially update an announcement; ``remove_link`` drops the current link."""

    try:
        announcement = update_announcement_uc(
            db,
            announcement_id,
            actor=current_user,
            title=title,
            body=body,
            visibility=visibility,
            department=department,
            link="" if remove_link else link,
            attachment=read_upload(attachment),
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return AnnouncementRead.from_entity(announcement, current_user)


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_announcement_uc(db, announcement_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{announcement_id}/pin", response_model=AnnouncementRead)
def toggle_pin(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnnouncementRead:
    try:
        announcement = toggle_pin_uc(db, announcement_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return AnnouncementRead.from_entity(announcement, current_user)


@router.patch("/{announcement_id}/read", response_model=AnnouncementReadState)
def mark_announcement_read(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnnouncementReadState:
    """Idempotently mark the announcement read for the caller."""

    try:
        updated = mark_announcement_read_uc(db, announcement_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return AnnouncementReadState(announcement_id=announcement_id, read=True, updated=updated)


@router.get("/{announcement_id}/engagement", response_model=EngagementRead)
def read_engagement(
    announcement_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EngagementRead:
    """Read statistics, available to administrators and the announcement's author."""

    try:
        engagement = get_announcement_engagement_uc(db, announcement_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return EngagementRead.from_entity(engagement)
