"""A small set of named log fields."""

from __future__ import annotations

from typing import Any


class Fields:
    """Key/value pairs attached to a log line."""

    def __init__(self, key: str | None = None, value: Any = None) -> None:
        self._values: dict[str, Any] = {}
        if key is not None:
            self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def values(self) -> dict[str, Any]:
        """A copy of the fields as a dictionary."""
        return dict(self._values)

    def merge(self, other: Fields) -> None:
        """Copy every field of ``other`` into this set, replacing equal keys."""
        self._values.update(other._values)

    def __copy__(self) -> Fields:
        duplicate = Fields()
        duplicate._values = dict(self._values)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Fields({self._values!r})"