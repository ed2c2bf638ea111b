"""
Redis Repository Base Class

Thin JSON layer over a Redis client used by the metadata tracker.
Errors from the client propagate as ``redis.RedisError`` so callers can
tell a missing key (None) apart from an unreachable server.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

import redis

logger = logging.getLogger(__name__)


class RedisRepository:
    """Base Redis repository with JSON values, JSON lists and key scans."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Create a prefixed key for Redis storage."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    def _strip_prefix(self, redis_key) -> str:
        if isinstance(redis_key, bytes):
            redis_key = redis_key.decode("utf-8")
        if self.key_prefix:
            return redis_key[len(self.key_prefix) + 1:]
        return redis_key

    @staticmethod
    def _decode(data) -> Any:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)

    def set_json(self, key: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """
        Set JSON data with optional TTL.

        Args:
            key: Redis key
            data: Dictionary to store as JSON
            ttl: Time to live in seconds

        Returns:
            True if Redis acknowledged the write
        """
        redis_key = self._make_key(key)
        json_data = json.dumps(data)

        if ttl:
            return bool(self.redis.setex(redis_key, ttl, json_data))
        return bool(self.redis.set(redis_key, json_data))

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get JSON data from Redis.

        Args:
            key: Redis key

        Returns:
            Dictionary if found and valid JSON, None if missing or corrupt
        """
        data = self.redis.get(self._make_key(key))
        if data is None:
            return None

        try:
            return self._decode(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Corrupt JSON stored under {key}: {e}")
            return None

    def append_json(self, key: str, data: Dict[str, Any]) -> int:
        """
        Append a JSON document to the list stored under a key.

        Returns:
            Length of the list after the append
        """
        return self.redis.rpush(self._make_key(key), json.dumps(data))

    def get_json_list(self, key: str) -> List[Dict[str, Any]]:
        """Return every JSON document of the list stored under a key."""
        items = []
        for raw in self.redis.lrange(self._make_key(key), 0, -1):
            try:
                items.append(self._decode(raw))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error(f"Skipping corrupt list entry under {key}: {e}")
        return items

    def delete(self, key: str) -> bool:
        """
        Delete a key from Redis.

        Returns:
            True if key was deleted, False if it did not exist
        """
        return self.redis.delete(self._make_key(key)) > 0

    def iter_keys(self, pattern: str) -> Iterator[str]:
        """
        Iterate keys matching a pattern using SCAN.

        Args:
            pattern: Redis key pattern (supports wildcards), without prefix

        Yields:
            Matching keys with the prefix removed
        """
        for redis_key in self.redis.scan_iter(match=self._make_key(pattern)):
            yield self._strip_prefix(redis_key)


class RedisConnectionManager:
    """Manages Redis connection with connection pooling."""

    def __init__(self, host: str = 'localhost', port: int = 6379, db: int = 0,
                 password: Optional[str] = None, max_connections: int = 20,
                 decode_responses: bool = False):
        self.connection_pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            max_connections=max_connections,
            decode_responses=decode_responses,
            socket_keepalive=True,
        )
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client instance with connection pooling."""
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client
