"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, UploadFile, status

from schoolhub.application.use_cases.uploads import UploadedFile
from schoolhub.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
)

# Exceptions raised by use cases that map onto client errors.
DOMAIN_ERRORS = (NotFoundError, ForbiddenError, InvalidInputError, ConflictError)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (PayloadTooLargeError, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Return the ``HTTPException`` matching a domain error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def read_upload(upload: UploadFile | None) -> UploadedFile | None:
    """Read a multipart upload into memory; empty file fields count as absent."""

    if upload is None or not upload.filename:
        return None
    try:
        data = upload.file.read()
    finally:
        upload.file.seek(0)
    return UploadedFile(
        filename=upload.filename,
        content_type=upload.content_type,
        data=data,
    )
