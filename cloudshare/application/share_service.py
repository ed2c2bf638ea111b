"""
Share Service

Application service that orchestrates the expiring share-link workflow.
Coordinates the validator, the content store and the metadata tracker, and
publishes domain events for state transitions.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from cloudshare.domain.errors import (
    BackendError,
    DomainError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from cloudshare.domain.events import (
    DomainEvent,
    FileDeletedEvent,
    FileDownloadedEvent,
    FileUploadedEvent,
    ShareExpiredEvent,
    StoreInconsistencyEvent,
    UploadRejectedEvent,
)
from cloudshare.domain.file_sharing.entities import (
    ANONYMOUS,
    SHARE_LINK_TTL,
    UploadRecord,
    utc_now,
)
from cloudshare.domain.file_sharing.repositories import IContentStore, IMetadataTracker
from cloudshare.domain.file_sharing.validator import UploadValidator
from cloudshare.domain.file_sharing.value_objects import ShareKey, UploadCandidate

from .event_publisher import EventPublisher
from .share_result import ShareResult

logger = logging.getLogger(__name__)


class ShareService:
    """
    Application service for the upload / download / delete workflows.

    Workflow orchestration:
    - Upload: validate -> content store put -> tracker track_upload
    - Download: tracker get_metadata -> liveness gate -> track_download
      (best-effort) -> content store get
    - Delete: tracker get_metadata -> liveness gate -> content store delete
      -> tracker remove_metadata

    The two stores are not transactional. When the second of two dependent
    calls fails, the first is left in place and a StoreInconsistencyEvent is
    published; nothing is retried or compensated.

    Every workflow returns a ShareResult instead of raising, so callers
    branch on ``result.error_category``.
    """

    def __init__(
        self,
        validator: UploadValidator,
        content_store: IContentStore,
        metadata_tracker: IMetadataTracker,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = utc_now,
        ttl: timedelta = SHARE_LINK_TTL,
    ):
        """
        Initialize Share Service with dependencies.

        Args:
            validator: Upload policy validator
            content_store: Object store adapter for file bytes
            metadata_tracker: Record store adapter for upload/download records
            event_publisher: Optional publisher for domain events
            clock: Callable returning the current UTC time
            ttl: Share window length
        """
        self.validator = validator
        self.content_store = content_store
        self.metadata_tracker = metadata_tracker
        self.event_publisher = event_publisher
        self.clock = clock
        self.ttl = ttl

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    def upload(
        self,
        candidate: Optional[UploadCandidate],
        uploaded_by: str = ANONYMOUS,
    ) -> ShareResult:
        """
        Run the upload workflow.

        Args:
            candidate: File received from the client, or None if none was sent
            uploaded_by: Caller identity recorded with the upload

        Returns:
            ShareResult with the new record on success
        """
        validation = self.validator.validate(candidate)
        if not validation.ok:
            self._publish(UploadRejectedEvent(
                aggregate_id=candidate.filename if candidate else "",
                occurred_at=self.clock(),
                reason=validation.reason.value,
                size_bytes=candidate.size_bytes if candidate else 0,
            ))
            return ShareResult.create_failure(ValidationError(validation.reason))

        key = ShareKey.generate(candidate.extension)
        logger.info(
            f"Starting upload: original_name={candidate.filename}, "
            f"size={candidate.size_bytes / 1024.0:.1f}KB, key={key}"
        )

        try:
            self.content_store.put(key.value, candidate.content, candidate.content_type)
        except BackendError as e:
            logger.error(f"Content store write failed for {key}: {e}", exc_info=True)
            return ShareResult.create_failure(e, key=key.value)

        record = UploadRecord(
            key=key.value,
            original_name=candidate.filename,
            size_bytes=candidate.size_bytes,
            content_type=candidate.content_type,
            uploaded_at=self.clock(),
            uploaded_by=uploaded_by or ANONYMOUS,
        )

        try:
            self.metadata_tracker.track_upload(record)
        except BackendError as e:
            logger.error(f"Metadata write failed for {key}: {e}", exc_info=True)
            self._report_inconsistency(key.value, "upload", "content_store.put",
                                       "metadata_tracker.track_upload", e)
            return ShareResult.create_failure(e, key=key.value)

        self._publish(FileUploadedEvent(
            aggregate_id=record.key,
            occurred_at=record.uploaded_at,
            original_name=record.original_name,
            size_bytes=record.size_bytes,
            content_type=record.content_type,
        ))
        return ShareResult.create_success(record)

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    def download(self, key: str, downloaded_by: str = ANONYMOUS) -> ShareResult:
        """
        Run the download workflow.

        Download tracking is best-effort: a tracker failure is logged and the
        content is still served.

        Args:
            key: Share key from the link
            downloaded_by: Caller identity recorded in the audit trail

        Returns:
            ShareResult with an open content stream on success
        """
        try:
            record = self._get_live_record(key, "download")
        except DomainError as e:
            return ShareResult.create_failure(e, key=key)

        who = downloaded_by or ANONYMOUS
        try:
            self.metadata_tracker.track_download(key, who, self.clock())
        except BackendError as e:
            logger.warning(f"Could not track download of {key}: {e}")

        try:
            content = self.content_store.get(key)
        except BackendError as e:
            logger.error(f"Content store read failed for {key}: {e}", exc_info=True)
            return ShareResult.create_failure(e, key=key)

        if content is None:
            logger.warning(f"Metadata exists but content is missing for {key}")
            return ShareResult.create_failure(
                NotFoundError(f"Content object missing for key: {key}"), key=key
            )

        self._publish(FileDownloadedEvent(
            aggregate_id=key, occurred_at=self.clock(), downloaded_by=who
        ))
        return ShareResult.create_success(record, content=content)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete(self, key: str) -> ShareResult:
        """
        Run the delete workflow.

        Content is removed before metadata. A missing content object does not
        block the metadata removal.

        Args:
            key: Share key from the link

        Returns:
            ShareResult with the removed record on success
        """
        try:
            record = self._get_live_record(key, "delete")
        except DomainError as e:
            return ShareResult.create_failure(e, key=key)

        try:
            content_removed = self.content_store.delete(key)
        except BackendError as e:
            logger.error(f"Content store delete failed for {key}: {e}", exc_info=True)
            return ShareResult.create_failure(e, key=key)

        try:
            self.metadata_tracker.remove_metadata(key)
        except BackendError as e:
            logger.error(f"Metadata delete failed for {key}: {e}", exc_info=True)
            self._report_inconsistency(key, "delete", "content_store.delete",
                                       "metadata_tracker.remove_metadata", e)
            return ShareResult.create_failure(e, key=key)

        self._publish(FileDeletedEvent(
            aggregate_id=key, occurred_at=self.clock(), content_removed=content_removed
        ))
        return ShareResult.create_success(record)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_share_info(self, key: str) -> Dict[str, Any]:
        """
        Describe a share link without downloading it.

        Expired keys are reported with ``live: False`` rather than rejected.

        Args:
            key: Share key

        Returns:
            Dictionary with record fields, expiry and download count

        Raises:
            NotFoundError: If the key is unknown
            BackendError: If the tracker cannot be read
        """
        record = self._get_record(key)
        now = self.clock()
        downloads = self.metadata_tracker.get_downloads(key)

        info = record.to_dict()
        info.update({
            "share_path": record.share_path(),
            "expires_at": record.expires_at(self.ttl).isoformat(),
            "live": record.is_live(now, self.ttl),
            "remaining_seconds": record.remaining_seconds(now, self.ttl),
            "download_count": len(downloads),
        })
        return info

    def recent_uploads(self, count: int = 10) -> List[UploadRecord]:
        """
        List the most recent uploads, newest first.

        Best-effort: a full tracker scan sorted client-side, with no
        pagination. A tracker failure yields an empty list.

        Args:
            count: Maximum number of records to return

        Returns:
            List of UploadRecord
        """
        try:
            records = self.metadata_tracker.list_uploads()
        except BackendError as e:
            logger.warning(f"Could not list recent uploads: {e}")
            return []

        records.sort(key=lambda r: r.uploaded_at, reverse=True)
        return records[:max(0, count)]

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def purge_expired(self) -> Dict[str, Any]:
        """
        Remove content and metadata of every expired upload.

        Uses the same store-then-metadata order as the delete workflow.
        Failures are collected per key and do not stop the scan.

        Returns:
            Statistics dictionary with ``scanned``, ``purged`` and ``errors``

        Raises:
            BackendError: If the tracker cannot be scanned
        """
        stats: Dict[str, Any] = {"scanned": 0, "purged": 0, "errors": []}
        now = self.clock()

        for record in self.metadata_tracker.list_uploads():
            stats["scanned"] += 1
            if record.is_live(now, self.ttl):
                continue

            try:
                self.content_store.delete(record.key)
            except BackendError as e:
                stats["errors"].append(f"{record.key}: {e}")
                logger.error(f"Purge could not delete content for {record.key}: {e}")
                continue

            try:
                self.metadata_tracker.remove_metadata(record.key)
            except BackendError as e:
                stats["errors"].append(f"{record.key}: {e}")
                self._report_inconsistency(record.key, "purge", "content_store.delete",
                                           "metadata_tracker.remove_metadata", e)
                continue

            stats["purged"] += 1
            logger.info(f"Purged expired upload {record.key}")

        return stats

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_record(self, key: str) -> UploadRecord:
        if not ShareKey.is_valid(key):
            raise NotFoundError(f"Malformed share key: {key!r}")

        record = self.metadata_tracker.get_metadata(key)
        if record is None:
            raise NotFoundError(f"No metadata for key: {key}")
        return record

    def _get_live_record(self, key: str, operation: str) -> UploadRecord:
        """
        Load a record and apply the liveness gate.

        Raises:
            NotFoundError: If the key is malformed or unknown
            ExpiredError: If the share window has elapsed
            BackendError: If the tracker cannot be read
        """
        record = self._get_record(key)
        now = self.clock()

        if not record.is_live(now, self.ttl):
            self._publish(ShareExpiredEvent(aggregate_id=key, occurred_at=now,
                                            operation=operation))
            raise ExpiredError(
                f"Key {key} expired at {record.expires_at(self.ttl).isoformat()}"
            )
        return record

    def _report_inconsistency(self, key: str, operation: str, completed_step: str,
                              failed_step: str, error: Exception) -> None:
        logger.warning(
            f"Stores inconsistent for {key}: {operation} completed {completed_step} "
            f"but {failed_step} failed ({error}); no rollback attempted"
        )
        self._publish(StoreInconsistencyEvent(
            aggregate_id=key,
            occurred_at=self.clock(),
            operation=operation,
            completed_step=completed_step,
            failed_step=failed_step,
            error_message=str(error),
        ))

    def _publish(self, event: DomainEvent) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
