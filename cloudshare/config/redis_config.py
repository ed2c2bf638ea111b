"""
Redis Configuration

Configures Redis connection settings and provides factory functions
for creating connection managers and repositories. Nothing is cached at
module level; the application factory owns the returned objects.
"""

import os

import redis

from cloudshare.infrastructure.redis_repository import RedisConnectionManager, RedisRepository


class RedisConfig:
    """Redis configuration settings."""

    def __init__(self):
        self.host = os.getenv("REDIS_HOST", "localhost")
        self.port = int(os.getenv("REDIS_PORT", 6379))
        self.db = int(os.getenv("REDIS_DB", 0))
        self.password = os.getenv("REDIS_PASSWORD")
        self.max_connections = int(os.getenv("REDIS_MAX_CONNECTIONS", 20))
        self.key_prefix = os.getenv("REDIS_KEY_PREFIX", "cloudshare")

        # Redis URL format: redis://[:password@]host:port/db
        self.url = os.getenv("REDIS_URL")
        if self.url:
            connection_params = redis.connection.parse_url(self.url)
            self.host = connection_params.get("host", self.host)
            self.port = connection_params.get("port", self.port)
            self.db = connection_params.get("db", self.db)
            self.password = connection_params.get("password", self.password)


def create_redis_manager(config: RedisConfig) -> RedisConnectionManager:
    """
    Build a Redis connection manager from configuration.

    The pool connects lazily, so this succeeds even when Redis is down.

    Args:
        config: Redis configuration

    Returns:
        RedisConnectionManager instance
    """
    connection_kwargs = {
        "host": config.host,
        "port": config.port,
        "db": config.db,
        "max_connections": config.max_connections,
    }

    if config.password:
        connection_kwargs["password"] = config.password

    return RedisConnectionManager(**connection_kwargs)


def create_redis_repository(manager: RedisConnectionManager, config: RedisConfig) -> RedisRepository:
    """Get a Redis repository namespaced by the configured key prefix."""
    return RedisRepository(manager.client, config.key_prefix)
