"""
File Sharing Repositories

Abstract interfaces for the two external stores.

The domain defines these contracts and infrastructure adapters implement
them, so the share-link workflow never depends on a cloud SDK directly.
Adapters translate client library failures into ``BackendError``.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, List, Optional, Union

from .entities import DownloadEvent, UploadRecord


class IContentStore(ABC):
    """
    Interface for the object store holding raw file bytes.

    Contract Guarantees:
    - Keys are opaque; the store never interprets them
    - ``get`` returns None for a missing object instead of raising
    - Any other failure raises BackendError
    """

    @abstractmethod
    def put(self, key: str, content: Union[bytes, BinaryIO], content_type: str) -> None:
        """
        Store content under a key, overwriting any existing object.

        Args:
            key: Object identifier
            content: Raw bytes or a binary stream positioned at the start
            content_type: MIME type recorded with the object

        Raises:
            BackendError: If the store rejects the write
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, key: str) -> Optional[BinaryIO]:
        """
        Retrieve content for a key.

        The caller is responsible for closing the returned stream.

        Args:
            key: Object identifier

        Returns:
            Binary stream positioned at the start, or None if the object does not exist

        Raises:
            BackendError: If the store cannot be read
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete the object stored under a key.

        Args:
            key: Object identifier

        Returns:
            True if an object was removed, False if none existed

        Raises:
            BackendError: If the store rejects the delete
        """
        pass  # pragma: no cover

    def health_check(self) -> bool:
        """Return True if the store is reachable."""
        return True

    @property
    def backend_name(self) -> str:
        return self.__class__.__name__


class IMetadataTracker(ABC):
    """
    Interface for the record store holding upload records and download events.

    Contract Guarantees:
    - ``track_upload`` is an idempotent upsert keyed by ``record.key``
    - ``track_download`` always appends, even if the key is unknown
    - ``get_metadata`` returns None for unknown keys
    - Any store failure raises BackendError
    """

    @abstractmethod
    def track_upload(self, record: UploadRecord) -> None:
        """Persist an upload record."""
        pass  # pragma: no cover

    @abstractmethod
    def track_download(self, key: str, downloaded_by: str,
                       downloaded_at: Optional[datetime] = None) -> DownloadEvent:
        """
        Append a download audit event.

        Args:
            key: Key that was downloaded
            downloaded_by: Caller identity
            downloaded_at: Event time, defaults to now

        Returns:
            The stored DownloadEvent
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_metadata(self, key: str) -> Optional[UploadRecord]:
        """Retrieve the upload record for a key, or None if it is unknown."""
        pass  # pragma: no cover

    @abstractmethod
    def remove_metadata(self, key: str) -> bool:
        """
        Remove the upload record for a key.

        Download events for the key are kept.

        Returns:
            True if a record was removed, False if none existed
        """
        pass  # pragma: no cover

    @abstractmethod
    def list_uploads(self) -> List[UploadRecord]:
        """Return every stored upload record, in no particular order."""
        pass  # pragma: no cover

    @abstractmethod
    def get_downloads(self, key: str) -> List[DownloadEvent]:
        """Return the download events recorded for a key, oldest first."""
        pass  # pragma: no cover

    def health_check(self) -> bool:
        """Return True if the store is reachable."""
        return True
