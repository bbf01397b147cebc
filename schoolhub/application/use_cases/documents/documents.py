"""Use cases for uploaded documents."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from schoolhub.application.use_cases.uploads import (
    ALLOWED_DOCUMENT_TYPES,
    UploadedFile,
    build_stored_name,
    validate_upload,
)
from schoolhub.domain.entities import Document, User
from schoolhub.domain.errors import InvalidInputError, NotFoundError
from schoolhub.infrastructure import storage
from schoolhub.infrastructure.repositories import DocumentRepository, FolderRepository
from schoolhub.utils import now_utc

DOCUMENT_FOLDER = "documents"


def _ensure_folder_exists(session: Session, folder_id: int | None) -> None:
    if folder_id is not None and FolderRepository(session).get(folder_id) is None:
        raise NotFoundError("Folder not found")


def list_documents(
    session: Session,
    *,
    category: str | None = None,
    folder_id: int | None = None,
) -> Sequence[Document]:
    return DocumentRepository(session).list(category=category, folder_id=folder_id)


def get_document(session: Session, document_id: int) -> Document:
    document = DocumentRepository(session).get(document_id)
    if document is None:
        raise NotFoundError("Document not found")
    return document


def read_document_content(session: Session, document_id: int) -> tuple[Document, bytes]:
    """Return the document metadata together with the stored bytes."""

    document = get_document(session, document_id)
    try:
        return document, storage.read_file(document.file_path)
    except FileNotFoundError as exc:
        raise NotFoundError("Document file not found") from exc


def upload_document(
    session: Session,
    *,
    actor: User,
    file: UploadedFile,
    title: str,
    category: str,
    description: str | None = None,
    folder_id: int | None = None,
) -> Document:
    """Validate, store and register a new document."""

    cleaned_title = (title or "").strip()
    cleaned_category = (category or "").strip()
    if not cleaned_title or not cleaned_category:
        raise InvalidInputError("Title and category are required")
    _ensure_folder_exists(session, folder_id)

    mime_type = validate_upload(file.content_type, len(file.data), ALLOWED_DOCUMENT_TYPES)
    stored_path = storage.save_file(
        DOCUMENT_FOLDER,
        build_stored_name(file.filename),
        file.data,
        content_type=mime_type,
    )
    document = Document(
        id=None,
        title=cleaned_title,
        description=(description or "").strip() or None,
        category=cleaned_category,
        folder_id=folder_id,
        file_path=stored_path,
        file_name=file.filename or "file",
        file_size=len(file.data),
        mime_type=mime_type,
        uploaded_by=actor.id,
        created_at=now_utc(),
    )
    try:
        return DocumentRepository(session).create(document)
    except Exception:
        storage.delete_file(stored_path)
        raise


def update_document(
    session: Session,
    document_id: int,
    *,
    title: str | None = None,
    description: str | None = None,
    category: str | None = None,
    folder_id: int | None = None,
    move_to_root: bool = False,
) -> Document:
    """Update metadata; ``move_to_root`` takes the document out of its folder."""

    document = get_document(session, document_id)
    changes: dict[str, object] = {}
    if title is not None:
        if not title.strip():
            raise InvalidInputError("Title is required")
        changes["title"] = title.strip()
    if category is not None:
        if not category.strip():
            raise InvalidInputError("Category is required")
        changes["category"] = category.strip()
    if description is not None:
        changes["description"] = description.strip() or None
    if move_to_root:
        changes["folder_id"] = None
    elif folder_id is not None:
        _ensure_folder_exists(session, folder_id)
        changes["folder_id"] = folder_id
    return DocumentRepository(session).update(replace(document, **changes))


def delete_document(session: Session, document_id: int) -> None:
    """Remove the document row and its stored file."""

    document = get_document(session, document_id)
    DocumentRepository(session).delete(document_id)
    storage.delete_file(document.file_path)


def list_categories(session: Session) -> list[str]:
    return DocumentRepository(session).list_categories()
