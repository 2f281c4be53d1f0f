"""Distributed lock backed by Redis."""

from __future__ import annotations

import redis
from redis.exceptions import LockError
from redis.lock import Lock


class RedisLocker:
    """Obtains named locks with a time-to-live from a Redis server."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    def __str__(self) -> str:
        return "redis"

    def lock(self, key: str, ttl: int) -> Lock:
        """Obtain the lock ``key`` for ``ttl`` seconds without waiting.

        Raises LockError when the lock is already held.
        """
        lock = self._client.lock(key, timeout=ttl)
        if not lock.acquire(blocking=False):
            raise LockError(f"lock {key} not obtained", lock_name=key)
        return lock