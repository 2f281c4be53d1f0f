"""Logger for SQL statements with levels, slow-query detection and colours."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"
BLUE_BOLD = "\033[34;1m"
MAGENTA_BOLD = "\033[35;1m"
RED_BOLD = "\033[31;1m"
YELLOW_BOLD = "\033[33;1m"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class LogLevel(IntEnum):
    """How much the SQL logger writes, from nothing to everything."""

    SILENT = 1
    ERROR = 2
    WARN = 3
    INFO = 4


@dataclass(frozen=True)
class SqlLoggerConfig:
    """Settings of a :class:`SqlLogger`; ``slow_threshold`` is in seconds, 0 disables it."""

    slow_threshold: float = 0.0
    colorful: bool = False
    log_level: LogLevel = LogLevel.SILENT


@dataclass(frozen=True)
class _Formats:
    info: str
    warn: str
    error: str
    trace: str
    trace_warn: str
    trace_err: str


_PLAIN = _Formats(
    info="%s\n[info] ",
    warn="%s\n[warn] ",
    error="%s\n[error] ",
    trace="%s [%.3fms] [rows:%s] %s",
    trace_warn="%s %s [%.3fms] [rows:%s] %s",
    trace_err="%s %s [%.3fms] [rows:%s] %s",
)

_COLORFUL = _Formats(
    info=GREEN + "%s " + RESET + GREEN + "[info] " + RESET,
    warn=BLUE_BOLD + "%s " + RESET + MAGENTA + "[warn] " + RESET,
    error=MAGENTA + "%s " + RESET + RED + "[error] " + RESET,
    trace=GREEN + "%s " + RESET + YELLOW + "[%.3fms] " + BLUE_BOLD + "[rows:%s]" + RESET + " %s",
    trace_warn=GREEN + "%s " + YELLOW + "%s " + RESET + RED_BOLD + "[%.3fms] "
    + YELLOW + "[rows:%s]" + MAGENTA + " %s" + RESET,
    trace_err=RED_BOLD + "%s " + MAGENTA_BOLD + "%s " + RESET + YELLOW + "[%.3fms] "
    + BLUE_BOLD + "[rows:%s]" + RESET + " %s",
)

_THIS_FILE = os.path.normcase(os.path.abspath(__file__))


def _caller() -> str:
    frame = sys._getframe(1)
    while frame is not None and os.path.normcase(
        os.path.abspath(frame.f_code.co_filename)
    ) == _THIS_FILE:
        frame = frame.f_back
    if frame is None:
        return ""
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:g}s"
    return f"{seconds * 1000:g}ms"


class SqlLogger:
    """Writes SQL messages and statement traces to a standard logger."""

    def __init__(
        self, config: SqlLoggerConfig, logger: logging.Logger | None = None
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("admincore.sql")
        self._formats = _COLORFUL if config.colorful else _PLAIN

    def log_mode(self, level: LogLevel) -> SqlLogger:
        """A copy of this logger that logs at ``level``."""
        return SqlLogger(dataclasses.replace(self.config, log_level=level), self.logger)

    def info(self, msg: str, *args: Any) -> None:
        if self.config.log_level >= LogLevel.INFO:
            self.logger.log(logging.INFO, self._formats.info + msg, _caller(), *args)

    def warn(self, msg: str, *args: Any) -> None:
        if self.config.log_level >= LogLevel.WARN:
            self.logger.log(logging.WARNING, self._formats.warn + msg, _caller(), *args)

    def error(self, msg: str, *args: Any) -> None:
        if self.config.log_level >= LogLevel.ERROR:
            self.logger.log(logging.ERROR, self._formats.error + msg, _caller(), *args)

    def trace(
        self,
        begin: float,
        fc: Callable[[], tuple[str, int]],
        err: BaseException | None,
    ) -> None:
        """Log a statement that started at ``begin`` (a ``time.perf_counter`` value).

        ``fc`` returns the SQL text and the affected row count, -1 when unknown.
        """
        level = self.config.log_level
        if level <= LogLevel.SILENT:
            return
        elapsed = time.perf_counter() - begin
        millis = elapsed * 1000
        threshold = self.config.slow_threshold
        if err is not None and level >= LogLevel.ERROR:
            sql, rows = fc()
            self.logger.log(
                TRACE, self._formats.trace_err, _caller(), err, millis, _rows(rows), sql
            )
        elif threshold and elapsed > threshold and level >= LogLevel.WARN:
            sql, rows = fc()
            slow = f"SLOW SQL >= {_format_duration(threshold)}"
            self.logger.log(
                TRACE, self._formats.trace_warn, _caller(), slow, millis, _rows(rows), sql
            )
        elif level == LogLevel.INFO:
            sql, rows = fc()
            self.logger.log(
                TRACE, self._formats.trace, _caller(), millis, _rows(rows), sql
            )


def _rows(rows: int) -> Any:
    return "-" if rows == -1 else rows