"""
Local Content Store Implementation

Concrete implementation of IContentStore on the local filesystem, used for
development and tests when no bucket is configured.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

from cloudshare.domain.errors import BackendError
from cloudshare.domain.file_sharing.repositories import IContentStore

logger = logging.getLogger(__name__)


class LocalContentStore(IContentStore):
    """
    Local filesystem implementation of IContentStore.

    Every key maps to one file directly under ``base_path``. Keys that would
    resolve outside the base directory are rejected.

    Attributes:
        base_path: Directory holding the stored files
    """

    def __init__(self, base_path: str = "/tmp/cloudshare"):
        """
        Initialize the local content store.

        Args:
            base_path: Base directory for file storage (default: /tmp/cloudshare)
        """
        self.base_path = Path(base_path)
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BackendError(
                f"Failed to create storage directory: {self.base_path}", e
            ) from e

    def _resolve(self, key: str) -> Path:
        if not key or not key.strip():
            raise ValueError("key cannot be empty")

        full_path = (self.base_path / key).resolve()
        if full_path.parent != self.base_path.resolve():
            raise ValueError(f"key escapes storage directory: {key!r}")
        return full_path

    def put(self, key: str, content: Union[bytes, BinaryIO], content_type: str) -> None:
        full_path = self._resolve(key)
        try:
            with open(full_path, "wb") as f:
                if isinstance(content, (bytes, bytearray)):
                    f.write(content)
                else:
                    if hasattr(content, 'seek'):
                        content.seek(0)
                    # 8KB chunks
                    while True:
                        chunk = content.read(8192)
                        if not chunk:
                            break
                        f.write(chunk)
        except OSError as e:
            raise BackendError(f"Failed to write {key}: {e}", e) from e

        logger.debug(f"Stored {key} ({content_type}) at {full_path}")

    def get(self, key: str) -> Optional[BinaryIO]:
        """
        Read a stored file into memory.

        Returns:
            BytesIO positioned at the start, or None if the file does not exist
        """
        try:
            full_path = self._resolve(key)
        except ValueError:
            return None

        if not full_path.is_file():
            return None

        try:
            with open(full_path, "rb") as f:
                return BytesIO(f.read())
        except FileNotFoundError:
            return None
        except OSError as e:
            raise BackendError(f"Failed to read {key}: {e}", e) from e

    def delete(self, key: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if a file was removed, False if none existed
        """
        try:
            full_path = self._resolve(key)
        except ValueError:
            return False

        try:
            full_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BackendError(f"Failed to delete {key}: {e}", e) from e
        return True

    def health_check(self) -> bool:
        return self.base_path.is_dir()

    @property
    def backend_name(self) -> str:
        return "local"
