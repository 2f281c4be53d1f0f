"""Cache adapter backed by a Redis server."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import redis


def _decode(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    return str(value)


class RedisCache:
    """A cache whose entries live in Redis."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._client.ping()

    def __str__(self) -> str:
        return "redis"

    @property
    def client(self) -> redis.Redis:
        """The underlying Redis client."""
        return self._client

    def get(self, key: str) -> str:
        """Return the value at ``key``; raise KeyError when it does not exist."""
        value = self._client.get(key)
        if value is None:
            raise KeyError(key)
        return _decode(value)

    def set(self, key: str, value: Any, expire: int) -> None:
        """Store ``value`` for ``expire`` seconds; 0 keeps it, -1 keeps the current TTL."""
        if expire > 0:
            self._client.set(key, value, ex=expire)
        elif expire == -1:
            self._client.set(key, value, keepttl=True)
        else:
            self._client.set(key, value)

    def delete(self, key: str) -> None:
        self._client.delete(key)

    def hash_get(self, hk: str, key: str) -> str:
        value = self._client.hget(hk, key)
        if value is None:
            raise KeyError(key)
        return _decode(value)

    def hash_delete(self, hk: str, key: str) -> None:
        self._client.hdel(hk, key)

    def increase(self, key: str) -> None:
        self._client.incr(key)

    def decrease(self, key: str) -> None:
        self._client.decr(key)

    def expire(self, key: str, duration: float | timedelta) -> None:
        if not isinstance(duration, timedelta):
            duration = timedelta(seconds=duration)
        self._client.expire(key, duration)