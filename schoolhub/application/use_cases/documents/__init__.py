"""Use cases for documents and folders."""

from .documents import (
    delete_document,
    get_document,
    list_categories,
    list_documents,
    read_document_content,
    update_document,
    upload_document,
)
from .folders import (
    FolderContents,
    create_folder,
    delete_folder,
    get_folder_contents,
    list_folders,
    update_folder,
)

__all__ = [
    "FolderContents",
    "create_folder",
    "delete_document",
    "delete_folder",
    "get_document",
    "get_folder_contents",
    "list_categories",
    "list_documents",
    "list_folders",
    "read_document_content",
    "update_document",
    "update_folder",
    "upload_document",
]
