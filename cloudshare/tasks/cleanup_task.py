"""
Cleanup Task

Celery beat task that purges expired uploads.
Thin wrapper that delegates to ShareService.purge_expired.
"""

import logging

from celery_app import celery_app

from cloudshare.config.celery_config import PURGE_TASK_NAME
from cloudshare.domain.errors import BackendError

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name=PURGE_TASK_NAME)
def purge_expired_uploads(self):
    """
    Remove content and metadata of every expired upload.

    Only scheduled when CLEANUP_ENABLED is set; without it expired records
    stay in place and keep answering as expired rather than unknown.

    Returns:
        dict: Purge statistics (scanned, purged, errors)
    """
    logger.info("Starting expired upload purge")

    from celery_app import flask_app
    from cloudshare.application.share_service import ShareService

    share_service = flask_app.container.resolve(ShareService)

    try:
        stats = share_service.purge_expired()
    except BackendError as e:
        logger.error(f"Purge aborted, metadata store unavailable: {e}", exc_info=True)
        return {"scanned": 0, "purged": 0, "errors": [str(e)]}

    logger.info(
        f"Purge completed: scanned={stats['scanned']}, purged={stats['purged']}, "
        f"errors={len(stats['errors'])}"
    )
    return stats
