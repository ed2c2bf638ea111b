"""
Logging Event Handler

Infrastructure event handler for logging domain events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from cloudshare.domain.events import (
    DomainEvent,
    FileDeletedEvent,
    FileDownloadedEvent,
    FileUploadedEvent,
    ShareExpiredEvent,
    StoreInconsistencyEvent,
    UploadRejectedEvent,
)


class LoggingEventHandler:
    """
    Infrastructure event handler for logging domain events.

    Subscribes to domain events and logs them at a level matching their
    severity. Handler failures are logged and never reach the caller.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        try:
            if isinstance(event, FileUploadedEvent):
                self._handle_uploaded(event)
            elif isinstance(event, UploadRejectedEvent):
                self._handle_rejected(event)
            elif isinstance(event, FileDownloadedEvent):
                self._handle_downloaded(event)
            elif isinstance(event, FileDeletedEvent):
                self._handle_deleted(event)
            elif isinstance(event, ShareExpiredEvent):
                self._handle_expired(event)
            elif isinstance(event, StoreInconsistencyEvent):
                self._handle_inconsistency(event)
            else:
                self.logger.debug(
                    f"Unhandled event: {event.__class__.__name__} "
                    f"(aggregate_id={event.aggregate_id})"
                )
        except Exception as e:
            # Log handler errors but don't fail the operation
            self.logger.error(
                f"Error handling event {event.__class__.__name__}: {e}",
                exc_info=True,
            )

    def _handle_uploaded(self, event: FileUploadedEvent) -> None:
        self.logger.info(
            f"File uploaded: key={event.aggregate_id}, "
            f"original_name={event.original_name}, "
            f"size={event.size_bytes / 1024.0:.1f}KB, "
            f"content_type={event.content_type}"
        )

    def _handle_rejected(self, event: UploadRejectedEvent) -> None:
        self.logger.info(
            f"Upload rejected: filename={event.aggregate_id!r}, "
            f"reason={event.reason}, size={event.size_bytes}"
        )

    def _handle_downloaded(self, event: FileDownloadedEvent) -> None:
        self.logger.info(
            f"File downloaded: key={event.aggregate_id}, by={event.downloaded_by}"
        )

    def _handle_deleted(self, event: FileDeletedEvent) -> None:
        self.logger.info(
            f"File deleted: key={event.aggregate_id}, "
            f"content_removed={event.content_removed}"
        )

    def _handle_expired(self, event: ShareExpiredEvent) -> None:
        self.logger.info(
            f"Expired key requested: key={event.aggregate_id}, operation={event.operation}"
        )

    def _handle_inconsistency(self, event: StoreInconsistencyEvent) -> None:
        self.logger.error(
            f"Store inconsistency: key={event.aggregate_id}, "
            f"operation={event.operation}, completed={event.completed_step}, "
            f"failed={event.failed_step}, error={event.error_message}"
        )
