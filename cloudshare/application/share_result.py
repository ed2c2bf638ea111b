"""
Share Result Value Object

Encapsulates the outcome of an upload, download or delete operation.
"""

from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Optional

from cloudshare.domain.errors import DomainError, ErrorCategory
from cloudshare.domain.file_sharing.entities import UploadRecord


@dataclass
class ShareResult:
    """
    Value object representing the result of a share-link operation.

    Successful results carry the record (and, for downloads, the content
    stream). Failed results carry the domain error, whose category selects
    the HTTP status and user message.
    """

    success: bool
    key: Optional[str] = None
    record: Optional[UploadRecord] = None
    content: Optional[BinaryIO] = None
    error: Optional[DomainError] = None

    @classmethod
    def create_success(
        cls,
        record: UploadRecord,
        content: Optional[BinaryIO] = None,
    ) -> 'ShareResult':
        """
        Create a successful result.

        Args:
            record: Upload record the operation acted on
            content: Content stream for downloads

        Returns:
            ShareResult indicating success
        """
        return cls(success=True, key=record.key, record=record, content=content)

    @classmethod
    def create_failure(cls, error: DomainError, key: Optional[str] = None) -> 'ShareResult':
        """
        Create a failed result.

        Args:
            error: Domain error describing the failure
            key: Key the operation targeted, if known

        Returns:
            ShareResult indicating failure
        """
        return cls(success=False, key=key, error=error)

    @property
    def error_category(self) -> Optional[ErrorCategory]:
        return self.error.category if self.error else None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None

    @property
    def share_path(self) -> Optional[str]:
        return self.record.share_path() if self.record else None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert result to dictionary for serialization.

        Returns:
            Dictionary representation of the result
        """
        return {
            'status': 'ok' if self.success else 'failed',
            'key': self.key,
            'share_path': self.share_path,
            'error': self.error_message,
            'error_category': self.error_category.value if self.error_category else None,
        }
