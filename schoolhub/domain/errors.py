"""Error taxonomy raised by use cases and translated at the HTTP boundary."""

from __future__ import annotations


class NotFoundError(LookupError):
    """The requested entity identifier does not resolve."""


class ForbiddenError(PermissionError):
    """The actor's role or ownership does not allow the operation."""


class InvalidInputError(ValueError):
    """A required field is missing or malformed."""


class PayloadTooLargeError(InvalidInputError):
    """An uploaded file exceeds the configured size limit."""


class ConflictError(ValueError):
    """The operation collides with existing state (duplicates, non-empty folders)."""


__all__ = [
    "ConflictError",
    "ForbiddenError",
    "InvalidInputError",
    "NotFoundError",
    "PayloadTooLargeError",
]
