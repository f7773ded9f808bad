"""
Redis cache adapter - Implements SessionCache protocol.

Remember-me snapshots are written with a plain SET and no expiry. Any
TTL policy belongs to the Redis deployment (e.g. maxmemory-policy).
"""

import logging

import redis

logger = logging.getLogger(__name__)


def create_redis_client(redis_url: str) -> redis.Redis:
    """Create Redis client returning str values."""
    return redis.from_url(redis_url, decode_responses=True)


class RedisSessionCache:
    """
    Implements SessionCache protocol via redis-py.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def get(self, key: str) -> str | None:
        value = self._client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
