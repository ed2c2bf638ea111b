"""
Google Cloud Storage Configuration

Builds the GCS client and bucket handle used by the content store.
"""

import logging
import os
from typing import Optional

from google.cloud import storage
from google.oauth2 import service_account

logger = logging.getLogger(__name__)


class GCSConfig:
    """GCS configuration settings."""

    def __init__(self):
        self.bucket_name = os.getenv("GCS_BUCKET_NAME")
        self.credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

    @property
    def is_configured(self) -> bool:
        return bool(self.bucket_name)


def create_gcs_client(credentials_path: Optional[str] = None) -> storage.Client:
    """
    Create a GCS client.

    Uses the service-account file when it exists, otherwise the ambient
    default credentials (e.g. on GCE or Cloud Run).

    Args:
        credentials_path: Path to a service-account JSON file

    Returns:
        Authenticated storage client
    """
    if credentials_path and os.path.exists(credentials_path):
        credentials = service_account.Credentials.from_service_account_file(
            credentials_path
        )
        logger.info(f"GCS client initialized with service account: {credentials_path}")
        return storage.Client(credentials=credentials)

    logger.info("GCS client initialized with default credentials")
    return storage.Client()


def create_gcs_bucket(config: GCSConfig) -> storage.Bucket:
    """
    Get a bucket handle for the configured bucket.

    Args:
        config: GCS configuration

    Returns:
        Bucket handle (existence is not checked)

    Raises:
        ValueError: If GCS_BUCKET_NAME is not set
    """
    if not config.is_configured:
        raise ValueError("GCS_BUCKET_NAME is not set")

    client = create_gcs_client(config.credentials_path)
    return client.bucket(config.bucket_name)
