"""
Domain Events

Immutable records of significant state changes in the share-link workflow.
Events decouple side effects (logging) from core business logic.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Share key the event refers to
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class FileUploadedEvent(DomainEvent):
    """
    Event emitted when content and metadata were both stored.

    Attributes:
        original_name: Filename supplied by the client
        size_bytes: Stored size
        content_type: MIME type stored with the object
    """
    original_name: str
    size_bytes: int
    content_type: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "original_name": self.original_name,
            "size_bytes": self.size_bytes,
            "content_type": self.content_type,
        })
        return base_dict


@dataclass(frozen=True)
class UploadRejectedEvent(DomainEvent):
    """
    Event emitted when the validator refuses a file.

    ``aggregate_id`` is the client filename because no key exists yet.
    """
    reason: str
    size_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"reason": self.reason, "size_bytes": self.size_bytes})
        return base_dict


@dataclass(frozen=True)
class FileDownloadedEvent(DomainEvent):
    """Event emitted when content is served for a live key."""
    downloaded_by: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"downloaded_by": self.downloaded_by})
        return base_dict


@dataclass(frozen=True)
class FileDeletedEvent(DomainEvent):
    """Event emitted when content and metadata of a key were removed."""
    content_removed: bool

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"content_removed": self.content_removed})
        return base_dict


@dataclass(frozen=True)
class ShareExpiredEvent(DomainEvent):
    """Event emitted when a download or delete hits an expired key."""
    operation: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"operation": self.operation})
        return base_dict


@dataclass(frozen=True)
class StoreInconsistencyEvent(DomainEvent):
    """
    Event emitted when the second of two dependent store calls failed.

    The first call is not rolled back, so the two stores disagree about
    the key until someone intervenes.

    Attributes:
        operation: Workflow that was interrupted ("upload", "delete", "purge")
        completed_step: Store call that succeeded
        failed_step: Store call that failed
        error_message: Technical failure message
    """
    operation: str
    completed_step: str
    failed_step: str
    error_message: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "operation": self.operation,
            "completed_step": self.completed_step,
            "failed_step": self.failed_step,
            "error_message": self.error_message,
        })
        return base_dict
