"""Unit tests for the error taxonomy and error responses."""

import pytest

from cloudshare.domain.errors import (
    ERROR_MESSAGES,
    ApplicationError,
    BackendError,
    DomainError,
    ErrorCategory,
    ExpiredError,
    NotFoundError,
    ValidationError,
    create_error_response,
)
from cloudshare.domain.file_sharing.value_objects import RejectionReason


def test_every_category_has_a_message():
    for category in ErrorCategory:
        assert set(ERROR_MESSAGES[category]) == {"title", "message", "action"}


@pytest.mark.parametrize("reason,message", [
    (RejectionReason.MISSING, "Please select a file!"),
    (RejectionReason.TOO_LARGE, "File too big! Max 10 MB allowed."),
    (RejectionReason.UNSUPPORTED_TYPE, "Only JPG, PNG and WebP images are allowed."),
])
def test_validation_error_messages(reason, message):
    error = ValidationError(reason)

    assert error.reason is reason
    assert error.category is reason.category
    assert error.user_message == message


@pytest.mark.parametrize("error_cls,category", [
    (NotFoundError, ErrorCategory.FILE_NOT_FOUND),
    (ExpiredError, ErrorCategory.FILE_EXPIRED),
    (BackendError, ErrorCategory.BACKEND_ERROR),
])
def test_domain_error_categories(error_cls, category):
    error = error_cls("technical detail")

    assert isinstance(error, DomainError)
    assert error.category is category
    assert "technical detail" not in error.user_message


def test_backend_error_keeps_original_exception():
    cause = ConnectionError("redis down")
    error = BackendError("wrapped", cause)

    assert error.original_error is cause


class TestErrorResponse:
    def test_details_hidden_by_default(self):
        body, status = create_error_response(
            ErrorCategory.BACKEND_ERROR, "bucket missing", status_code=500
        )

        assert status == 500
        assert body["error"] == "backend_error"
        assert "details" not in body

    def test_details_included_when_requested(self):
        body, _ = create_error_response(
            ErrorCategory.BACKEND_ERROR, "bucket missing", include_details=True
        )

        assert body["details"] == "bucket missing"

    def test_application_error_message(self):
        error = ApplicationError(ErrorCategory.FILE_EXPIRED)

        assert str(error) == ERROR_MESSAGES[ErrorCategory.FILE_EXPIRED]["message"]
        assert error.to_dict()["title"] == "Link Expired"
