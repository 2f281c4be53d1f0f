"""Log levels and fields for RPC calls."""

from __future__ import annotations

import copy
import posixpath
from datetime import timedelta
from enum import IntEnum
from typing import Any

from admincore.rpclog.fields import Fields


class Code(IntEnum):
    """RPC status codes."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    def __str__(self) -> str:
        if self is Code.OK:
            return "OK"
        return "".join(part.capitalize() for part in self.name.split("_"))


class Level(IntEnum):
    """Severity of a log line, lowest first."""

    TRACE = -2
    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    FATAL = 3


SYSTEM_FIELD = Fields("system", "grpc")
SERVER_FIELD = Fields("span.kind", "server")
CLIENT_FIELD = Fields("span.kind", "client")

_SERVER_LEVELS = {
    Code.OK: Level.INFO,
    Code.CANCELED: Level.INFO,
    Code.UNKNOWN: Level.ERROR,
    Code.INVALID_ARGUMENT: Level.INFO,
    Code.DEADLINE_EXCEEDED: Level.WARN,
    Code.NOT_FOUND: Level.INFO,
    Code.ALREADY_EXISTS: Level.INFO,
    Code.PERMISSION_DENIED: Level.WARN,
    Code.UNAUTHENTICATED: Level.INFO,
    Code.RESOURCE_EXHAUSTED: Level.WARN,
    Code.FAILED_PRECONDITION: Level.WARN,
    Code.ABORTED: Level.WARN,
    Code.OUT_OF_RANGE: Level.WARN,
    Code.UNIMPLEMENTED: Level.ERROR,
    Code.INTERNAL: Level.ERROR,
    Code.UNAVAILABLE: Level.WARN,
    Code.DATA_LOSS: Level.ERROR,
}

_CLIENT_LEVELS = {
    Code.OK: Level.DEBUG,
    Code.CANCELED: Level.DEBUG,
    Code.UNKNOWN: Level.INFO,
    Code.INVALID_ARGUMENT: Level.DEBUG,
    Code.DEADLINE_EXCEEDED: Level.INFO,
    Code.NOT_FOUND: Level.DEBUG,
    Code.ALREADY_EXISTS: Level.DEBUG,
    Code.PERMISSION_DENIED: Level.INFO,
    Code.UNAUTHENTICATED: Level.INFO,
    Code.RESOURCE_EXHAUSTED: Level.DEBUG,
    Code.FAILED_PRECONDITION: Level.DEBUG,
    Code.ABORTED: Level.DEBUG,
    Code.OUT_OF_RANGE: Level.DEBUG,
    Code.UNIMPLEMENTED: Level.WARN,
    Code.INTERNAL: Level.WARN,
    Code.UNAVAILABLE: Level.WARN,
    Code.DATA_LOSS: Level.WARN,
}


def default_code_to_level(code: int) -> Level:
    """The server-side log level for a status code; unknown codes log as errors."""
    return _SERVER_LEVELS.get(code, Level.ERROR)


def default_client_code_to_level(code: int) -> Level:
    """The client-side log level for a status code; unknown codes log as info."""
    return _CLIENT_LEVELS.get(code, Level.INFO)


def _microseconds(duration: float | timedelta) -> int:
    if isinstance(duration, timedelta):
        return duration // timedelta(microseconds=1)
    return int(duration * 1_000_000)


def duration_to_time_millis_field(duration: float | timedelta) -> Fields:
    """A ``grpc.time_ms`` field in milliseconds, truncated to the microsecond.

    A plain number is taken as seconds.
    """
    return Fields("grpc.time_ms", _microseconds(duration) / 1000)


def duration_to_duration_field(duration: Any) -> dict[str, Any]:
    """A ``grpc.duration`` field holding the duration as given."""
    return {"grpc.duration": duration}


def _call_fields(full_method: str, kind: Fields) -> Fields:
    fields = copy.copy(SYSTEM_FIELD)
    fields.merge(kind)
    fields.set("grpc.service", posixpath.dirname(full_method)[1:])
    fields.set("grpc.method", posixpath.basename(full_method))
    return fields


def server_call_fields(full_method: str) -> Fields:
    """Fields naming the service and method of a server call ``/service/method``."""
    return _call_fields(full_method, SERVER_FIELD)


def client_call_fields(full_method: str) -> Fields:
    """Fields naming the service and method of a client call ``/service/method``."""
    return _call_fields(full_method, CLIENT_FIELD)