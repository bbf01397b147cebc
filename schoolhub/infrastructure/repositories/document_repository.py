"""Persistence layer for uploaded document metadata."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from schoolhub.domain.entities import Document
from schoolhub.domain.errors import NotFoundError
from schoolhub.infrastructure.models import DocumentModel
from schoolhub.utils import ensure_utc

from .user_repository import UserRepository


class DocumentRepository:
    """Provide CRUD operations for :class:`Document` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        category: str | None = None,
        folder_id: int | None = None,
        limit: int | None = None,
    ) -> Sequence[Document]:
        query = self.session.query(DocumentModel)
        if category:
            query = query.filter(DocumentModel.category == category)
        if folder_id is not None:
            query = query.filter(DocumentModel.folder_id == folder_id)
        query = query.order_by(DocumentModel.created_at.desc(), DocumentModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, document_id: int) -> Document | None:
        model = self.session.get(DocumentModel, document_id)
        return self._to_entity(model) if model else None

    def create(self, document: Document) -> Document:
        model = DocumentModel(
            file_path=document.file_path,
            file_name=document.file_name,
            file_size=document.file_size,
            mime_type=document.mime_type,
            uploaded_by=document.uploaded_by,
        )
        self._apply_entity_to_model(model, document)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, document: Document) -> Document:
        model = self.session.get(DocumentModel, document.id)
        if model is None:
            msg = f"Document with id {document.id} not found"
            raise NotFoundError(msg)
        self._apply_entity_to_model(model, document)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, document_id: int) -> None:
        model = self.session.get(DocumentModel, document_id)
        if model is None:
            msg = f"Document with id {document_id} not found"
            raise NotFoundError(msg)
        self.session.delete(model)
        self.session.commit()

    def list_categories(self) -> list[str]:
        query = (
            self.session.query(DocumentModel.category)
            .distinct()
            .order_by(DocumentModel.category.asc())
        )
        return [category for (category,) in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(DocumentModel.id)).scalar() or 0

    @staticmethod
    def _apply_entity_to_model(model: DocumentModel, document: Document) -> None:
        model.title = document.title
        model.description = document.description
        model.category = document.category
        model.folder_id = document.folder_id

    @staticmethod
    def _to_entity(model: DocumentModel) -> Document:
        return Document(
            id=model.id,
            title=model.title,
            description=model.description,
            category=model.category,
            folder_id=model.folder_id,
            file_path=model.file_path,
            file_name=model.file_name,
            file_size=model.file_size,
            mime_type=model.mime_type,
            uploaded_by=model.uploaded_by,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            uploader=UserRepository.to_entity(model.uploader) if model.uploader else None,
        )


__all__ = ["DocumentRepository"]
