"""
Google Cloud Storage Content Store

Concrete implementation of IContentStore for Google Cloud Storage.
The share key is used as the blob name, so every object lives at the
bucket root.
"""

import logging
from io import BytesIO
from typing import BinaryIO, Optional, Union

from google.cloud import storage
from google.cloud.exceptions import GoogleCloudError, NotFound

from cloudshare.domain.errors import BackendError
from cloudshare.domain.file_sharing.repositories import IContentStore

logger = logging.getLogger(__name__)


class GCSContentStore(IContentStore):
    """
    Google Cloud Storage implementation of IContentStore.

    The bucket handle is injected, so the store never builds its own client
    or reads credentials from the environment.

    Thread Safety:
        The GCS client handles concurrent operations safely.

    Attributes:
        bucket: GCS bucket object holding the uploaded files
    """

    def __init__(self, bucket: storage.Bucket):
        """
        Initialize the GCS content store.

        Args:
            bucket: Bucket handle from an authenticated storage client

        Raises:
            ValueError: If no bucket is given
        """
        if bucket is None:
            raise ValueError("bucket cannot be None")
        self.bucket = bucket

    @property
    def bucket_name(self) -> str:
        return self.bucket.name

    def put(self, key: str, content: Union[bytes, BinaryIO], content_type: str) -> None:
        """
        Upload content to the bucket.

        Raises:
            ValueError: If key is empty
            BackendError: If GCS or its transport fails
        """
        if not key or not key.strip():
            raise ValueError("key cannot be empty")

        blob = self.bucket.blob(key)
        try:
            if isinstance(content, (bytes, bytearray)):
                blob.upload_from_string(bytes(content), content_type=content_type)
            else:
                if hasattr(content, 'seek'):
                    content.seek(0)
                blob.upload_from_file(content, content_type=content_type)
        except GoogleCloudError as e:
            raise BackendError(f"Failed to upload {key} to GCS: {e}", e) from e
        except Exception as e:
            raise BackendError(f"Unexpected error uploading {key} to GCS: {e}", e) from e

        logger.debug(f"Uploaded {key} to gs://{self.bucket_name}")

    def get(self, key: str) -> Optional[BinaryIO]:
        """
        Download a blob into memory.

        Returns:
            BytesIO positioned at the start, or None if the blob does not exist

        Raises:
            BackendError: If GCS fails for any other reason
        """
        if not key or not key.strip():
            return None

        blob = self.bucket.blob(key)
        try:
            data = blob.download_as_bytes()
        except NotFound:
            return None
        except GoogleCloudError as e:
            raise BackendError(f"Failed to download {key} from GCS: {e}", e) from e
        except Exception as e:
            raise BackendError(f"Unexpected error downloading {key} from GCS: {e}", e) from e

        return BytesIO(data)

    def delete(self, key: str) -> bool:
        """
        Delete a blob.

        Returns:
            True if the blob was deleted, False if it did not exist

        Raises:
            BackendError: If GCS or its transport fails
        """
        if not key or not key.strip():
            return False

        blob = self.bucket.blob(key)
        try:
            blob.delete()
        except NotFound:
            return False
        except GoogleCloudError as e:
            raise BackendError(f"Failed to delete {key} from GCS: {e}", e) from e
        except Exception as e:
            raise BackendError(f"Unexpected error deleting {key} from GCS: {e}", e) from e

        logger.debug(f"Deleted {key} from gs://{self.bucket_name}")
        return True

    def health_check(self) -> bool:
        try:
            return bool(self.bucket.exists())
        except Exception as e:
            logger.warning(f"GCS health check failed: {e}")
            return False

    @property
    def backend_name(self) -> str:
        return "gcs"
