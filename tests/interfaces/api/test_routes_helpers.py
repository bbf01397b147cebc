"""Tests for the mapping of domain errors onto HTTP responses."""

import pytest

from schoolhub.domain.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
)
from schoolhub.interfaces.api.routes_helpers import DOMAIN_ERRORS, to_http_exception


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (NotFoundError("Message not found"), 404),
        (ForbiddenError("Access denied"), 403),
        (InvalidInputError("Title is required"), 400),
        (PayloadTooLargeError("File too large"), 413),
        (ConflictError("Folder is not empty"), 409),
    ],
)
def test_domain_errors_map_to_client_statuses(error, status_code):
    assert isinstance(error, DOMAIN_ERRORS)

    http_error = to_http_exception(error)

    assert http_error.status_code == status_code
    assert http_error.detail == str(error)


@pytest.mark.parametrize("error", [KeyError("id"), IndexError("list index"), ValueError("bad")])
def test_builtin_errors_are_not_treated_as_domain_errors(error):
    assert not isinstance(error, DOMAIN_ERRORS)
    assert to_http_exception(error).status_code == 500
