"""
Infrastructure Layer

Adapters that implement the domain store interfaces on Redis, Google Cloud
Storage and the local filesystem.
"""

from .local_content_store import LocalContentStore
from .redis_metadata_tracker import RedisMetadataTracker
from .redis_repository import RedisConnectionManager, RedisRepository
from .storage_factory import StorageFactory

__all__ = [
    "LocalContentStore",
    "RedisConnectionManager",
    "RedisMetadataTracker",
    "RedisRepository",
    "StorageFactory",
]
