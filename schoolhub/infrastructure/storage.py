"""File storage for document uploads and announcement attachments.

Files live either on the local filesystem below ``Settings.upload_dir`` or in
an Azure Blob Storage container, selected by ``Settings.storage_backend``.
Stored paths look like ``/uploads/<subfolder>/<name>`` in both cases.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path, PurePosixPath
import logging

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from schoolhub.config import get_settings

PUBLIC_PREFIX = "/uploads"

logger = logging.getLogger(__name__)


@lru_cache
def _get_container_client():
    settings = get_settings()
    if not settings.azure_storage_connection_string:
        msg = "Azure storage connection string is not configured"
        raise RuntimeError(msg)
    if not settings.azure_storage_container_name:
        msg = "Azure storage container name is not configured"
        raise RuntimeError(msg)
    service_client = BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )
    try:
        service_client.create_container(settings.azure_storage_container_name)
    except ResourceExistsError:
        pass
    return service_client.get_container_client(settings.azure_storage_container_name)


def _use_azure() -> bool:
    return get_settings().storage_backend == "azure"


def _relative_key(stored_path: str) -> str:
    """Turn ``/uploads/documents/x.pdf`` into ``documents/x.pdf``."""

    path = PurePosixPath(stored_path)
    parts = [part for part in path.parts if part not in ("/", "..")]
    if parts and parts[0] == PUBLIC_PREFIX.strip("/"):
        parts = parts[1:]
    if not parts:
        raise ValueError(f"Invalid stored path: {stored_path}")
    return "/".join(parts)


def _local_path(stored_path: str) -> Path:
    return Path(get_settings().upload_dir) / _relative_key(stored_path)


def save_file(
    subfolder: str,
    filename: str,
    data: bytes,
    *,
    content_type: str | None = None,
) -> str:
    """Store ``data`` and return its public path."""

    stored_path = f"{PUBLIC_PREFIX}/{subfolder}/{filename}"
    if _use_azure():
        blob_client = _get_container_client().get_blob_client(_relative_key(stored_path))
        content_settings = None
        if content_type is not None:
            content_settings = ContentSettings(content_type=content_type)
        blob_client.upload_blob(data, overwrite=True, content_settings=content_settings)
    else:
        destination = _local_path(stored_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)
    return stored_path


def read_file(stored_path: str) -> bytes:
    """Return the content stored at ``stored_path``."""

    if _use_azure():
        blob_client = _get_container_client().get_blob_client(_relative_key(stored_path))
        try:
            return blob_client.download_blob().readall()
        except ResourceNotFoundError as exc:
            raise FileNotFoundError(stored_path) from exc
    path = _local_path(stored_path)
    if not path.is_file():
        raise FileNotFoundError(stored_path)
    return path.read_bytes()


def delete_file(stored_path: str) -> None:
    """Delete the file at ``stored_path`` if it exists."""

    if _use_azure():
        blob_client = _get_container_client().get_blob_client(_relative_key(stored_path))
        try:
            blob_client.delete_blob()
        except ResourceNotFoundError:
            logger.warning("Blob %s was already missing", stored_path)
        return
    path = _local_path(stored_path)
    if path.exists():
        path.unlink()
    else:
        logger.warning("Stored file %s was already missing", stored_path)


__all__ = ["PUBLIC_PREFIX", "delete_file", "read_file", "save_file"]
