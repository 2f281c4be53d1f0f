"""Messages carried by the queue adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

PREFIX_KEY = "__host"


@dataclass
class Message:
    """A queued message: identifier, stream name, payload values and retry count."""

    id: str = ""
    stream: str = ""
    values: dict[str, Any] | None = None
    error_count: int = 0

    @property
    def prefix(self) -> str:
        """The tenant prefix stored in the values, or an empty string."""
        if self.values is None:
            return ""
        value = self.values.get(PREFIX_KEY)
        return value if isinstance(value, str) else ""

    @prefix.setter
    def prefix(self, prefix: str) -> None:
        if self.values is None:
            self.values = {}
        self.values[PREFIX_KEY] = prefix


ConsumerFunc = Callable[[Message], None]