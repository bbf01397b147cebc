"""Use cases for the folder tree that organises documents."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from sqlalchemy.orm import Session

from schoolhub.domain.entities import Document, Folder, User
from schoolhub.domain.errors import ConflictError, InvalidInputError, NotFoundError
from schoolhub.infrastructure.repositories import DocumentRepository, FolderRepository

MAX_FOLDER_NAME_LENGTH = 120


@dataclass
class FolderContents:
    folder: Folder
    subfolders: list[Folder]
    documents: list[Document]


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidInputError("Folder name is required")
    if len(cleaned) > MAX_FOLDER_NAME_LENGTH:
        raise InvalidInputError(
            f"Folder name must be at most {MAX_FOLDER_NAME_LENGTH} characters"
        )
    if "/" in cleaned:
        raise InvalidInputError("Folder name cannot contain '/'")
    return cleaned


def _get(session: Session, folder_id: int) -> Folder:
    folder = FolderRepository(session).get(folder_id)
    if folder is None:
        raise NotFoundError("Folder not found")
    return folder


def _ensure_unique(session: Session, name: str, parent_id: int | None, *, exclude_id: int | None = None) -> None:
    existing = FolderRepository(session).get_by_name(name, parent_id=parent_id)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError("A folder with this name already exists here")


def list_folders(session: Session, *, parent_id: int | None = None) -> Sequence[Folder]:
    if parent_id is not None:
        _get(session, parent_id)
    return FolderRepository(session).list(parent_id=parent_id)


def get_folder_contents(session: Session, folder_id: int) -> FolderContents:
    folder = _get(session, folder_id)
    return FolderContents(
        folder=folder,
        subfolders=list(FolderRepository(session).list(parent_id=folder_id)),
        documents=list(DocumentRepository(session).list(folder_id=folder_id)),
    )


def create_folder(
    session: Session, *, actor: User, name: str, parent_id: int | None = None
) -> Folder:
    cleaned = _clean_name(name)
    if parent_id is not None:
        _get(session, parent_id)
    _ensure_unique(session, cleaned, parent_id)
    return FolderRepository(session).create(
        Folder(id=None, name=cleaned, parent_id=parent_id, created_by=actor.id)
    )


def update_folder(
    session: Session,
    folder_id: int,
    *,
    name: str | None = None,
    parent_id: int | None = None,
    move_to_root: bool = False,
) -> Folder:
    """Rename and/or move a folder; a folder cannot move below itself."""

    folder = _get(session, folder_id)
    new_name = _clean_name(name) if name is not None else folder.name
    new_parent = folder.parent_id
    if move_to_root:
        new_parent = None
    elif parent_id is not None:
        _get(session, parent_id)
        if folder_id in FolderRepository(session).list_ancestor_ids(parent_id):
            raise InvalidInputError("A folder cannot be moved into itself or its subfolders")
        new_parent = parent_id

    _ensure_unique(session, new_name, new_parent, exclude_id=folder_id)
    return FolderRepository(session).update(replace(folder, name=new_name, parent_id=new_parent))


def delete_folder(session: Session, folder_id: int) -> None:
    """Delete an empty folder."""

    _get(session, folder_id)
    repository = FolderRepository(session)
    if repository.count_children(folder_id):
        raise ConflictError("Folder is not empty")
    repository.delete(folder_id)
