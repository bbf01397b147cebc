"""Persistence layer for document folders."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from schoolhub.domain.entities import Folder
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import DocumentModel, FolderModel
from schoolhub.utils import ensure_utc


class FolderRepository:
    """Provide CRUD operations for :class:`Folder` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, parent_id: int | None = None) -> Sequence[Folder]:
        query = self.session.query(FolderModel)
        if parent_id is None:
            query = query.filter(FolderModel.parent_id.is_(None))
        else:
            query = query.filter(FolderModel.parent_id == parent_id)
        query = query.order_by(FolderModel.name.asc())
        return [self._to_entity(model) for model in query.all()]

    def get(self, folder_id: int) -> Folder | None:
        model = self.session.get(FolderModel, folder_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str, *, parent_id: int | None) -> Folder | None:
        query = self.session.query(FolderModel).filter(
            func.lower(FolderModel.name) == name.lower()
        )
        if parent_id is None:
            query = query.filter(FolderModel.parent_id.is_(None))
        else:
            query = query.filter(FolderModel.parent_id == parent_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, folder: Folder) -> Folder:
        model = FolderModel(
            name=folder.name,
            parent_id=folder.parent_id,
            created_by=folder.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, folder: Folder) -> Folder:
        model = self.session.get(FolderModel, folder.id)
        if model is None:
            msg = f"Folder with id {folder.id} not found"
            raise NotFoundError(msg)
        model.name = folder.name
        model.parent_id = folder.parent_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, folder_id: int) -> None:
        model = self.session.get(FolderModel, folder_id)
        if model is None:
            msg = f"Folder with id {folder_id} not found"
            raise NotFoundError(msg)
        self.session.delete(model)
        self.session.commit()

    def count_children(self, folder_id: int) -> int:
        subfolders = (
            self.session.query(func.count(FolderModel.id))
            .filter(FolderModel.parent_id == folder_id)
            .scalar()
        )
        documents = (
            self.session.query(func.count(DocumentModel.id))
            .filter(DocumentModel.folder_id == folder_id)
            .scalar()
        )
        return (subfolders or 0) + (documents or 0)

    def list_ancestor_ids(self, folder_id: int) -> list[int]:
        """Return ids from ``folder_id`` up to the root, ``folder_id`` included."""

        ancestors: list[int] = []
        current = self.session.get(FolderModel, folder_id)
        while current is not None and current.id not in ancestors:
            ancestors.append(current.id)
            if current.parent_id is None:
                break
            current = self.session.get(FolderModel, current.parent_id)
        return ancestors

    @staticmethod
    def _to_entity(model: FolderModel) -> Folder:
        return Folder(
            id=model.id,
            name=model.name,
            parent_id=model.parent_id,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["FolderRepository"]
