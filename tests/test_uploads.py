"""Tests for upload validation helpers."""

import re

import pytest

from schoolhub.application.use_cases.uploads import (
    ALLOWED_ANNOUNCEMENT_TYPES,
    ALLOWED_DOCUMENT_TYPES,
    build_stored_name,
    validate_upload,
)
from schoolhub.domain.errors import InvalidInputError, PayloadTooLargeError


def test_validate_upload_accepts_allowed_type_and_strips_parameters():
    assert validate_upload("text/plain; charset=utf-8", 10, ALLOWED_DOCUMENT_TYPES) == "text/plain"


def test_validate_upload_lists_allowed_types_on_rejection():
    with pytest.raises(InvalidInputError) as exc_info:
        validate_upload("text/plain", 10, ALLOWED_ANNOUNCEMENT_TYPES)

    assert "application/pdf" in str(exc_info.value)


def test_validate_upload_rejects_missing_content_type():
    with pytest.raises(InvalidInputError):
        validate_upload(None, 10, ALLOWED_DOCUMENT_TYPES)


def test_validate_upload_rejects_oversized_files():
    with pytest.raises(PayloadTooLargeError):
        validate_upload("application/pdf", 64 * 1024 + 1, ALLOWED_DOCUMENT_TYPES)


def test_build_stored_name_keeps_extension():
    name = build_stored_name("Report Final.PDF")

    assert re.fullmatch(r"\d+-\d+\.pdf", name)
