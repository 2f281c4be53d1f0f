"""Request metadata helpers: request identifiers and user names."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Union

REQUEST_ID_KEY = "x-request-id"
USERNAME_KEY = "x-username"

Metadata = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    return str(value)


def _values(metadata: Metadata, key: str) -> list[str]:
    if metadata is None:
        return []
    wanted = key.lower()
    items = metadata.items() if isinstance(metadata, Mapping) else metadata
    found: list[str] = []
    for name, value in items:
        if name.lower() != wanted:
            continue
        if isinstance(value, (str, bytes, bytearray)):
            found.append(_as_text(value))
        else:
            found.extend(_as_text(item) for item in value)
    return found


def get_header_first(metadata: Metadata, key: str) -> str:
    """Return the first value of ``key`` in ``metadata``, or an empty string.

    ``metadata`` is a mapping or a sequence of ``(key, value)`` pairs; keys
    match without regard to case.
    """
    values = _values(metadata, key)
    return values[0] if values else ""


def new_request_id() -> str:
    """Generate a new random request identifier."""
    return str(uuid.uuid4())


def get_request_id(metadata: Metadata) -> str:
    """Return the request id from ``metadata``, generating one when absent."""
    return get_header_first(metadata, REQUEST_ID_KEY) or new_request_id()


def get_username(metadata: Metadata) -> str:
    """Return the user name from ``metadata``, or an empty string."""
    return get_header_first(metadata, USERNAME_KEY)