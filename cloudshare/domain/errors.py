"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions carry the user-facing message used by API responses.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    MISSING_FILE = "missing_file"
    FILE_TOO_LARGE = "file_too_large"
    UNSUPPORTED_TYPE = "unsupported_type"
    FILE_NOT_FOUND = "file_not_found"
    FILE_EXPIRED = "file_expired"
    BACKEND_ERROR = "backend_error"
    INVALID_REQUEST = "invalid_request"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.MISSING_FILE: {
        "title": "No File Selected",
        "message": "Please select a file!",
        "action": "Choose an image to upload and submit the form again.",
    },
    ErrorCategory.FILE_TOO_LARGE: {
        "title": "File Too Large",
        "message": "File too big! Max 10 MB allowed.",
        "action": "Resize or compress the image below 10 MB and try again.",
    },
    ErrorCategory.UNSUPPORTED_TYPE: {
        "title": "Unsupported File Type",
        "message": "Only JPG, PNG and WebP images are allowed.",
        "action": "Convert the file to JPG, PNG or WebP and try again.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found or has been deleted.",
        "action": "Ask the sender for a new share link.",
    },
    ErrorCategory.FILE_EXPIRED: {
        "title": "Link Expired",
        "message": "This share link has expired. Links are valid for 10 minutes after upload.",
        "action": "Ask the sender to upload the image again.",
    },
    ErrorCategory.BACKEND_ERROR: {
        "title": "Storage Error",
        "message": "The storage service could not complete the request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Every domain error belongs to exactly one ErrorCategory so that the
    API layer can translate it without inspecting message text.
    """

    category: ErrorCategory = ErrorCategory.SYSTEM_ERROR

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """
        Initialize domain error.

        Args:
            message: Technical error message (server-side only)
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error

    @property
    def user_message(self) -> str:
        """User-facing message for this error's category."""
        return ERROR_MESSAGES[self.category]["message"]


class ValidationError(DomainError):
    """
    Raised when an inbound file violates the upload policy.

    The category is chosen from the rejection reason, so each reason
    surfaces its own message.
    """

    def __init__(self, reason, message: Optional[str] = None):
        self.reason = reason
        self.category = reason.category
        super().__init__(message or f"Upload rejected: {reason.value}")


class NotFoundError(DomainError):
    """Raised when a key is absent from the metadata or content store."""

    category = ErrorCategory.FILE_NOT_FOUND


class ExpiredError(DomainError):
    """Raised when a key's share window has elapsed."""

    category = ErrorCategory.FILE_EXPIRED


class BackendError(DomainError):
    """
    Raised when the content store or metadata store fails.

    Wraps the client library exception so adapters never leak
    vendor-specific types into the domain.
    """

    category = ErrorCategory.BACKEND_ERROR


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self, include_details: bool = False) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Args:
            include_details: Append the technical message under ``details``

        Returns:
            Dictionary with error information
        """
        data = {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }
        if include_details and self.technical_message:
            data["details"] = self.technical_message
        return data


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
    include_details: bool = False,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details
        context: Additional context information
        status_code: HTTP status code
        include_details: Whether the technical message is returned to the caller

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    return error.to_dict(include_details=include_details), status_code
