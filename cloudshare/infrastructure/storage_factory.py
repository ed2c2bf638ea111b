"""
Storage Factory

Factory for creating the content store implementation.

The application layer stays decoupled from the concrete store through the
IContentStore interface; this factory picks the adapter from configuration.
"""

import logging
import os
from typing import Optional

from cloudshare.domain.file_sharing.repositories import IContentStore

from .local_content_store import LocalContentStore

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory that returns a GCS or local filesystem content store."""

    @staticmethod
    def resolve_backend(backend: Optional[str] = None) -> str:
        """
        Decide which backend to use.

        Explicit value, then STORAGE_BACKEND, then ``gcs`` if a bucket is
        configured, otherwise ``local``.
        """
        backend = backend or os.getenv("STORAGE_BACKEND")
        if not backend:
            backend = "gcs" if os.getenv("GCS_BUCKET_NAME") else "local"
        return backend.strip().lower()

    @staticmethod
    def create_storage(backend: Optional[str] = None) -> IContentStore:
        """
        Create the content store.

        Args:
            backend: ``gcs`` or ``local``; resolved from the environment if None

        Returns:
            IContentStore implementation

        Environment Variables:
            STORAGE_BACKEND: ``gcs`` or ``local``
            LOCAL_STORAGE_DIR: Base directory for local storage (default: /tmp/cloudshare)
            GCS_BUCKET_NAME: Bucket for the GCS backend

        Raises:
            ValueError: If the backend name is unknown
            RuntimeError: If the selected store cannot be initialized
        """
        backend = StorageFactory.resolve_backend(backend)

        if backend == "gcs":
            return StorageFactory._create_gcs_storage()
        if backend == "local":
            return StorageFactory._create_local_storage()
        raise ValueError(f"Unknown storage backend: {backend!r}")

    @staticmethod
    def _create_gcs_storage() -> IContentStore:
        try:
            from cloudshare.config.gcs_config import GCSConfig, create_gcs_bucket
            from cloudshare.infrastructure.gcs_content_store import GCSContentStore

            config = GCSConfig()
            store = GCSContentStore(create_gcs_bucket(config))
            logger.info(f"Storage factory: Using GCS bucket {config.bucket_name}")
            return store
        except Exception as e:
            raise RuntimeError(f"Failed to initialize GCS storage: {e}") from e

    @staticmethod
    def _create_local_storage() -> IContentStore:
        try:
            storage_dir = os.getenv("LOCAL_STORAGE_DIR", "/tmp/cloudshare")
            store = LocalContentStore(storage_dir)
            logger.info(f"Storage factory: Using local filesystem storage at {storage_dir}")
            return store
        except Exception as e:
            raise RuntimeError(f"Failed to initialize local storage: {e}") from e
