"""Validation and naming of uploaded files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
import secrets
import time
from typing import Final

from schoolhub.config import get_settings
from schoolhub.domain.errors import InvalidInputError, PayloadTooLargeError

ALLOWED_DOCUMENT_TYPES: Final[tuple[str, ...]] = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "image/jpeg",
    "image/png",
    "image/gif",
)

ALLOWED_ANNOUNCEMENT_TYPES: Final[tuple[str, ...]] = (
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


@dataclass(frozen=True)
class UploadedFile:
    """File received from a multipart request, already read into memory."""

    filename: str
    content_type: str | None
    data: bytes


def validate_upload(
    content_type: str | None,
    size: int,
    allowed_types: tuple[str, ...],
) -> str:
    """Return the accepted MIME type or raise for disallowed or oversized files."""

    mime_type = (content_type or "").split(";", 1)[0].strip().lower()
    if mime_type not in allowed_types:
        raise InvalidInputError(
            f"File type {mime_type or 'unknown'} not allowed. "
            f"Allowed types: {', '.join(allowed_types)}"
        )
    max_size = get_settings().max_file_size
    if size > max_size:
        raise PayloadTooLargeError(f"File exceeds the maximum size of {max_size} bytes")
    return mime_type


def build_stored_name(original_name: str) -> str:
    """Return ``<epoch-ms>-<random><ext>`` keeping the original extension."""

    suffix = PurePath(original_name or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


__all__ = [
    "ALLOWED_ANNOUNCEMENT_TYPES",
    "ALLOWED_DOCUMENT_TYPES",
    "UploadedFile",
    "build_stored_name",
    "validate_upload",
]
