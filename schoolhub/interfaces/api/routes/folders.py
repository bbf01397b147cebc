"""Routes for the document folder tree."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.documents import (
    create_folder as create_folder_uc,
    delete_folder as delete_folder_uc,
    get_folder_contents as get_folder_contents_uc,
    list_folders as list_folders_uc,
    update_folder as update_folder_uc,
)
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user, require_admin
from schoolhub.interfaces.api.routes_helpers import DOMAIN_ERRORS, to_http_exception
from schoolhub.interfaces.api.schemas import (
    DocumentRead,
    FolderContentsRead,
    FolderCreate,
    FolderRead,
    FolderUpdate,
)

router = APIRouter(prefix="/folders", tags=["folders"])


@router.get("/", response_model=list[FolderRead])
def list_folders(
    parent_id: int | None = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[FolderRead]:
    """List top-level folders, or the children of ``parent_id``."""

    try:
        folders = list_folders_uc(db, parent_id=parent_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return [FolderRead.model_validate(folder) for folder in folders]


@router.get("/{folder_id}", response_model=FolderContentsRead)
def read_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> FolderContentsRead:
    try:
        contents = get_folder_contents_uc(db, folder_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return FolderContentsRead(
        **FolderRead.model_validate(contents.folder).model_dump(),
        subfolders=[FolderRead.model_validate(folder) for folder in contents.subfolders],
        documents=[DocumentRead.from_entity(document) for document in contents.documents],
    )


@router.post("/", response_model=FolderRead, status_code=status.HTTP_201_CREATED)
def create_folder(
    payload: FolderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> FolderRead:
    try:
        folder = create_folder_uc(
            db, actor=current_user, name=payload.name, parent_id=payload.parent_id
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return FolderRead.model_validate(folder)


@router.put("/{folder_id}", response_model=FolderRead)
def update_folder(
    folder_id: int,
    payload: FolderUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> FolderRead:
    """Rename or move a folder; ``parent_id: null`` moves it to the top level."""

    move_to_root = "parent_id" in payload.model_fields_set and payload.parent_id is None
    try:
        folder = update_folder_uc(
            db,
            folder_id,
            name=payload.name,
            parent_id=payload.parent_id,
            move_to_root=move_to_root,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return FolderRead.model_validate(folder)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder(
    folder_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_folder_uc(db, folder_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
