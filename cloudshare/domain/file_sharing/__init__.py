"""
File Sharing Domain

Handles upload validation, share keys, expiration and the store contracts.
"""

from .entities import (
    ANONYMOUS,
    SHARE_LINK_TTL,
    DownloadEvent,
    UploadRecord,
    is_live,
    utc_now,
)
from .repositories import IContentStore, IMetadataTracker
from .validator import UploadValidator
from .value_objects import (
    ALLOWED_EXTENSIONS,
    MAX_UPLOAD_BYTES,
    InvalidShareKeyError,
    RejectionReason,
    ShareKey,
    UploadCandidate,
    UploadPolicy,
    ValidationResult,
)

__all__ = [
    "ANONYMOUS",
    "ALLOWED_EXTENSIONS",
    "MAX_UPLOAD_BYTES",
    "SHARE_LINK_TTL",
    "DownloadEvent",
    "IContentStore",
    "IMetadataTracker",
    "InvalidShareKeyError",
    "RejectionReason",
    "ShareKey",
    "UploadCandidate",
    "UploadPolicy",
    "UploadRecord",
    "UploadValidator",
    "ValidationResult",
    "is_live",
    "utc_now",
]
