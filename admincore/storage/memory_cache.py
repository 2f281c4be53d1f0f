"""In-process cache with per-key expiry."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any


class CacheError(Exception):
    """Raised when a cache operation cannot be carried out."""


@dataclass
class _Item:
    value: str
    expires: float


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    raise CacheError(
        f"unable to cast {value!r} of type {type(value).__name__} to string"
    )


def _to_int(text: str) -> int:
    candidate = text
    whole, dot, fraction = text.partition(".")
    if dot and fraction.strip("0") == "":
        candidate = whole
    try:
        return int(candidate, 0)
    except ValueError as exc:
        raise CacheError(f"unable to cast {text!r} to int") from exc


def _seconds(duration: float | timedelta) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


class MemoryCache:
    """A thread-safe key/value cache held in memory."""

    def __init__(self) -> None:
        self._items: dict[str, _Item] = {}
        self._lock = threading.RLock()

    def __str__(self) -> str:
        return "memory"

    def _get_item(self, key: str) -> _Item | None:
        item = self._items.get(key)
        if item is None:
            return None
        if item.expires < time.monotonic():
            self._items.pop(key, None)
            return None
        return item

    def _require(self, key: str) -> _Item:
        item = self._get_item(key)
        if item is None:
            raise CacheError(f"{key} not exist")
        return item

    def get(self, key: str) -> str:
        """Return the stored value, or an empty string when missing or expired."""
        with self._lock:
            item = self._get_item(key)
            return "" if item is None else item.value

    def set(self, key: str, value: Any, expire: float) -> None:
        """Store ``value`` as a string for ``expire`` seconds."""
        text = _to_string(value)
        with self._lock:
            self._items[key] = _Item(text, time.monotonic() + expire)

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def hash_get(self, hk: str, key: str) -> str:
        return self.get(hk + key)

    def hash_delete(self, hk: str, key: str) -> None:
        self.delete(hk + key)

    def increase(self, key: str) -> None:
        self._calculate(key, 1)

    def decrease(self, key: str) -> None:
        self._calculate(key, -1)

    def _calculate(self, key: str, delta: int) -> None:
        with self._lock:
            item = self._require(key)
            item.value = str(_to_int(item.value) + delta)

    def expire(self, key: str, duration: float | timedelta) -> None:
        """Let an existing key expire ``duration`` from now."""
        with self._lock:
            item = self._require(key)
            item.expires = time.monotonic() + _seconds(duration)