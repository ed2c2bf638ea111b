"""
Error Mapping

Single table translating error categories into HTTP status codes, shared by
the HTML routes and the JSON API.
"""

from typing import Any, Dict, Optional

from cloudshare.domain.errors import (
    DomainError,
    ErrorCategory,
    ValidationError,
    create_error_response,
)
from cloudshare.domain.file_sharing.value_objects import RejectionReason

HTTP_STATUS: Dict[ErrorCategory, int] = {
    ErrorCategory.MISSING_FILE: 400,
    ErrorCategory.FILE_TOO_LARGE: 400,
    ErrorCategory.UNSUPPORTED_TYPE: 400,
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.FILE_EXPIRED: 400,
    ErrorCategory.FILE_NOT_FOUND: 404,
    ErrorCategory.BACKEND_ERROR: 500,
    ErrorCategory.SYSTEM_ERROR: 500,
}


def status_for(category: Optional[ErrorCategory]) -> int:
    """HTTP status for an error category; unknown categories are server errors."""
    return HTTP_STATUS.get(category, 500)


def describe_error(error: DomainError, expose_details: bool = False) -> str:
    """
    User-visible message for a domain error.

    With ``expose_details`` the technical message of a backend failure is
    appended, which reveals store internals and is meant for development.
    """
    message = error.user_message
    if expose_details and error.category is ErrorCategory.BACKEND_ERROR and str(error):
        message = f"{message} ({error})"
    return message


def error_response_for(error: DomainError, expose_details: bool = False,
                       context: Optional[Dict[str, Any]] = None) -> tuple[Dict[str, Any], int]:
    """
    JSON error body and status for a domain error.

    Technical details are only included for backend failures.
    """
    include_details = expose_details and error.category is ErrorCategory.BACKEND_ERROR
    return create_error_response(
        error.category,
        str(error),
        context=context,
        status_code=status_for(error.category),
        include_details=include_details,
    )


def oversized_request_error() -> ValidationError:
    """Error used when Werkzeug refuses a body above MAX_CONTENT_LENGTH."""
    return ValidationError(RejectionReason.TOO_LARGE, "Request body exceeds MAX_CONTENT_LENGTH")
