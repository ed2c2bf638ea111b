"""
Redis Metadata Tracker Implementation

Concrete Redis-based implementation of the IMetadataTracker interface.
"""

import logging
from datetime import datetime
from typing import List, Optional

from redis.exceptions import RedisError

from cloudshare.domain.errors import BackendError
from cloudshare.domain.file_sharing.entities import DownloadEvent, UploadRecord
from cloudshare.domain.file_sharing.repositories import IMetadataTracker

from .redis_repository import RedisRepository

logger = logging.getLogger(__name__)


class RedisMetadataTracker(IMetadataTracker):
    """
    Redis-based implementation of IMetadataTracker.

    Layout:
    - ``upload:<key>`` holds the UploadRecord as JSON, with no Redis TTL so
      expired records stay readable and are reported as expired, not unknown
    - ``downloads:<key>`` is a list of DownloadEvent JSON documents, appended
      on every download and never trimmed
    """

    def __init__(self, redis_repository: RedisRepository):
        """
        Initialize with Redis repository.

        Args:
            redis_repository: RedisRepository instance from infrastructure layer
        """
        self.redis_repo = redis_repository
        self.upload_prefix = "upload"
        self.download_prefix = "downloads"

    def _upload_key(self, key: str) -> str:
        return f"{self.upload_prefix}:{key}"

    def _download_key(self, key: str) -> str:
        return f"{self.download_prefix}:{key}"

    def track_upload(self, record: UploadRecord) -> None:
        """Save or overwrite an upload record."""
        try:
            stored = self.redis_repo.set_json(self._upload_key(record.key), record.to_dict())
        except RedisError as e:
            raise BackendError(f"Failed to save metadata for {record.key}: {e}", e) from e

        if not stored:
            raise BackendError(f"Redis did not acknowledge metadata write for {record.key}")

    def track_download(self, key: str, downloaded_by: str,
                       downloaded_at: Optional[datetime] = None) -> DownloadEvent:
        """Append a download event; the key does not need to exist."""
        event = DownloadEvent.create(key, downloaded_by, downloaded_at)
        try:
            self.redis_repo.append_json(self._download_key(key), event.to_dict())
        except RedisError as e:
            raise BackendError(f"Failed to record download of {key}: {e}", e) from e
        return event

    def get_metadata(self, key: str) -> Optional[UploadRecord]:
        """Retrieve an upload record from Redis."""
        try:
            data = self.redis_repo.get_json(self._upload_key(key))
        except RedisError as e:
            raise BackendError(f"Failed to read metadata for {key}: {e}", e) from e

        if data is None:
            return None

        try:
            return UploadRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error deserializing upload record {key}: {e}")
            return None

    def remove_metadata(self, key: str) -> bool:
        """Delete an upload record; its download events are kept."""
        try:
            return self.redis_repo.delete(self._upload_key(key))
        except RedisError as e:
            raise BackendError(f"Failed to delete metadata for {key}: {e}", e) from e

    def list_uploads(self) -> List[UploadRecord]:
        """Scan every upload record."""
        records = []
        try:
            for redis_key in self.redis_repo.iter_keys(f"{self.upload_prefix}:*"):
                key = redis_key[len(self.upload_prefix) + 1:]
                record = self.get_metadata(key)
                if record is not None:
                    records.append(record)
        except RedisError as e:
            raise BackendError(f"Failed to scan upload records: {e}", e) from e
        return records

    def get_downloads(self, key: str) -> List[DownloadEvent]:
        """Return the download audit trail of a key."""
        try:
            items = self.redis_repo.get_json_list(self._download_key(key))
        except RedisError as e:
            raise BackendError(f"Failed to read downloads for {key}: {e}", e) from e

        events = []
        for item in items:
            try:
                events.append(DownloadEvent.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed download event for {key}: {e}")
        return events

    def health_check(self) -> bool:
        try:
            return bool(self.redis_repo.redis.ping())
        except RedisError:
            return False
