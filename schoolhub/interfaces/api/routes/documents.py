"""Routes for uploaded documents."""

from urllib.parse import quote

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.documents import (
    delete_document as delete_document_uc,
    get_document as get_document_uc,
    list_categories as list_categories_uc,
    list_documents as list_documents_uc,
    read_document_content as read_document_content_uc,
    update_document as update_document_uc,
    upload_document as upload_document_uc,
)
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user, require_admin
from schoolhub.interfaces.api.routes_helpers import (
    DOMAIN_ERRORS,
    read_upload,
    to_http_exception,
)
from schoolhub.interfaces.api.schemas import DocumentRead, DocumentUpdate

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("/", response_model=list[DocumentRead])
def list_documents(
    category: str | None = Query(None),
    folder_id: int | None = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[DocumentRead]:
    documents = list_documents_uc(db, category=category, folder_id=folder_id)
    return [DocumentRead.from_entity(document) for document in documents]


@router.get("/meta/categories", response_model=list[str])
def list_categories(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[str]:
    return list_categories_uc(db)


@router.get("/{document_id}", response_model=DocumentRead)
def read_document(
    document_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> DocumentRead:
    try:
        document = get_document_uc(db, document_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return DocumentRead.from_entity(document)


@router.get("/{document_id}/download")
def download_document(
    document_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> Response:
    """Stream the stored file back with its original name."""

    try:
        document, content = read_document_content_uc(db, document_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(
        content=content,
        media_type=document.mime_type,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(document.file_name)}"
        },
    )


@router.post("/", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    title: str = Form(...),
    category: str = Form(...),
    description: str | None = Form(None),
    folder_id: int | None = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> DocumentRead:
    upload = read_upload(file)
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    try:
        document = upload_document_uc(
            db,
            actor=current_user,
            file=upload,
            title=title,
            category=category,
            description=description,
            folder_id=folder_id,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return DocumentRead.from_entity(document)


@router.put("/{document_id}", response_model=DocumentRead)
def update_document(
    document_id: int,
    payload: DocumentUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> DocumentRead:
    move_to_root = "folder_id" in payload.model_fields_set and payload.folder_id is None
    try:
        document = update_document_uc(
            db,
            document_id,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            folder_id=payload.folder_id,
            move_to_root=move_to_root,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return DocumentRead.from_entity(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_document_uc(db, document_id)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
