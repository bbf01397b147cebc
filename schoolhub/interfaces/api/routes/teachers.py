"""Routes to manage teacher profiles."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.teachers import (
    create_teacher as create_teacher_uc,
    delete_teacher as delete_teacher_uc,
    get_teacher as get_teacher_uc,
    list_teachers as list_teachers_uc,
    update_teacher as update_teacher_uc,
)
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user, require_admin
from schoolhub.interfaces.api.routes_helpers import DOMAIN_ERRORS, to_http_exception
from schoolhub.interfaces.api.schemas import TeacherCreate, TeacherRead, TeacherUpdate

router = APIRouter(prefix="/teachers", tags=["teachers"])


@router.get("/", response_model=list[TeacherRead])
def list_teachers(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[TeacherRead]:
    return [TeacherRead.from_entities(teacher, user) for teacher, user in list_teachers_uc(db)]


@router.get("/{teacher_id}", response_model=TeacherRead)
def read_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TeacherRead:
    try:
        teacher, user = get_teacher_uc(db, teacher_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return TeacherRead.from_entities(teacher, user)


@router.post("/", response_model=TeacherRead, status_code=status.HTTP_201_CREATED)
def create_teacher(
    payload: TeacherCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> TeacherRead:
    """Attach a teacher profile to an existing account with the ``TEACHER`` role."""

    try:
        teacher, user = create_teacher_uc(db, **payload.model_dump())
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return TeacherRead.from_entities(teacher, user)


@router.put("/{teacher_id}", response_model=TeacherRead)
def update_teacher(
    teacher_id: int,
    payload: TeacherUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> TeacherRead:
    try:
        teacher, user = update_teacher_uc(db, teacher_id, **payload.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return TeacherRead.from_entities(teacher, user)


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_teacher(
    teacher_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_teacher_uc(db, teacher_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
