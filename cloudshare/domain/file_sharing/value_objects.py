"""
File Sharing Value Objects

Immutable value objects for type safety and validation.
"""

import re
import uuid
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import FrozenSet, Optional

from ..errors import ErrorCategory


MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp"})


class InvalidShareKeyError(ValueError):
    """Raised when a share key is malformed."""
    pass


class RejectionReason(Enum):
    """Reasons the validator can refuse an upload."""

    MISSING = "missing"
    TOO_LARGE = "too_large"
    UNSUPPORTED_TYPE = "unsupported_type"

    @property
    def category(self) -> ErrorCategory:
        return _REASON_CATEGORIES[self]


_REASON_CATEGORIES = {
    RejectionReason.MISSING: ErrorCategory.MISSING_FILE,
    RejectionReason.TOO_LARGE: ErrorCategory.FILE_TOO_LARGE,
    RejectionReason.UNSUPPORTED_TYPE: ErrorCategory.UNSUPPORTED_TYPE,
}


def file_extension(filename: Optional[str]) -> str:
    """
    Return the lower-cased extension of a filename, including the dot.

    Returns an empty string when the name has no extension.
    """
    if not filename:
        return ""
    return PurePosixPath(filename.replace("\\", "/")).suffix.lower()


@dataclass(frozen=True)
class UploadPolicy:
    """Static size and type policy applied to every upload."""

    max_bytes: int = MAX_UPLOAD_BYTES
    allowed_extensions: FrozenSet[str] = ALLOWED_EXTENSIONS

    def allows_extension(self, extension: str) -> bool:
        return extension.lower() in self.allowed_extensions


@dataclass(frozen=True)
class UploadCandidate:
    """
    An inbound file as received from the HTTP layer.

    Attributes:
        filename: Name supplied by the client
        content: Raw bytes of the file
        content_type: MIME type supplied by the client
    """

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return file_extension(self.filename)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an UploadCandidate."""

    reason: Optional[RejectionReason] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def accepted(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "ValidationResult":
        return cls(reason=reason)


_SHARE_KEY_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\.[a-z0-9]{1,10}$"
)


@dataclass(frozen=True)
class ShareKey:
    """
    Value object representing a content key.

    A key is a random UUID followed by the original file's extension,
    e.g. ``3f2b8c1e-5d4a-4e6f-9a7b-0c1d2e3f4a5b.png``. The same value names
    the object in the content store and the record in the metadata tracker.
    """

    value: str

    def __post_init__(self):
        if not self.is_valid(self.value):
            raise InvalidShareKeyError(f"Invalid share key: {self.value!r}")

    @staticmethod
    def is_valid(value: str) -> bool:
        return isinstance(value, str) and bool(_SHARE_KEY_PATTERN.match(value))

    @classmethod
    def generate(cls, extension: str) -> "ShareKey":
        """
        Generate a new key for a file with the given extension.

        Args:
            extension: File extension including the dot (e.g. ``.png``)

        Returns:
            New ShareKey instance
        """
        return cls(f"{uuid.uuid4()}{extension.lower()}")

    @property
    def extension(self) -> str:
        return file_extension(self.value)

    def share_path(self) -> str:
        return f"/download/{self.value}"

    def __str__(self) -> str:
        return self.value
