"""Document and folder schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from schoolhub.domain.entities import Document


class DocumentRead(BaseModel):
    id: int
    title: str
    description: str | None = None
    category: str
    folder_id: int | None = None
    file_path: str
    file_name: str
    file_size: int
    mime_type: str
    uploaded_by: int
    uploader_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, document: Document) -> "DocumentRead":
        return cls(
            id=document.id,
            title=document.title,
            description=document.description,
            category=document.category,
            folder_id=document.folder_id,
            file_path=document.file_path,
            file_name=document.file_name,
            file_size=document.file_size,
            mime_type=document.mime_type,
            uploaded_by=document.uploaded_by,
            uploader_name=document.uploader.display_name if document.uploader else None,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class DocumentUpdate(BaseModel):
    """Partial update; an explicit ``folder_id: null`` moves the document to the root."""

    title: str | None = Field(default=None, max_length=200)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    folder_id: int | None = None

    model_config = ConfigDict(extra="forbid")


class FolderCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    parent_id: int | None = None


class FolderUpdate(BaseModel):
    """Partial update; an explicit ``parent_id: null`` moves the folder to the root."""

    name: str | None = Field(default=None, max_length=120)
    parent_id: int | None = None

    model_config = ConfigDict(extra="forbid")


class FolderRead(BaseModel):
    id: int
    name: str
    parent_id: int | None = None
    created_by: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FolderContentsRead(FolderRead):
    subfolders: list[FolderRead]
    documents: list[DocumentRead]
