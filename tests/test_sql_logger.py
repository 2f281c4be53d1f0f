import logging
import time

import pytest

from admincore.tools.sql_logger import (
    GREEN,
    TRACE,
    LogLevel,
    SqlLogger,
    SqlLoggerConfig,
)

LOGGER_NAME = "tests.sql"


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__(level=1)
        self.records = []

    def emit(self, record):
        self.records.append(record)

    def logged(self):
        return [(record.levelno, record.getMessage()) for record in self.records]


@pytest.fixture
def collector():
    target = logging.getLogger(LOGGER_NAME)
    previous = target.level
    target.setLevel(1)
    handler = _Collector()
    target.addHandler(handler)
    try:
        yield handler
    finally:
        target.removeHandler(handler)
        target.setLevel(previous)


def _target():
    return logging.getLogger(LOGGER_NAME)


def test_colorful_info_logs(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=1.0, colorful=True, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.INFO)
    assert sql.config.log_level is LogLevel.INFO
    assert sql.config.colorful is True
    sql.info("test")
    ((_, message),) = collector.logged()
    assert message.startswith(GREEN)
    assert message.endswith("[info] \033[0mtest")


def test_info_names_the_caller(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.INFO)
    assert sql.config.log_level is LogLevel.INFO
    sql.info("hello %s", "world")
    ((_, message),) = collector.logged()
    assert "test_sql_logger.py:" in message
    assert message.endswith("\n[info] hello world")


def test_info_suppressed_below_info(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.INFO),
        _target(),
    )
    sql = base.log_mode(LogLevel.WARN)
    assert sql.config.log_level is LogLevel.WARN
    sql.info("test")
    assert collector.logged() == []


def test_warn_and_error_levels(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.WARN)
    assert sql.config.log_level is LogLevel.WARN
    sql.warn("careful")
    sql.error("broken")
    levels = [levelno for levelno, _ in collector.logged()]
    assert levels == [logging.WARNING, logging.ERROR]


def test_log_mode_returns_new_logger():
    original = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.WARN),
        _target(),
    )
    louder = original.log_mode(LogLevel.INFO)
    assert louder.config.log_level is LogLevel.INFO
    assert original.config.log_level is LogLevel.WARN


def test_trace_error_with_unknown_rows(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.ERROR)
    assert sql.config.log_level is LogLevel.ERROR
    sql.trace(time.perf_counter(), lambda: ("select 1", -1), RuntimeError("boom"))
    ((levelno, message),) = collector.logged()
    assert "boom" in message
    assert "[rows:-]" in message
    assert message.endswith("select 1")
    assert levelno == TRACE


def test_trace_slow_query(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.001, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.WARN)
    assert sql.config.log_level is LogLevel.WARN
    assert sql.config.slow_threshold == 0.001
    sql.trace(time.perf_counter() - 1, lambda: ("select 2", 4), None)
    ((_, message),) = collector.logged()
    assert "SLOW SQL >= 1ms" in message
    assert "[rows:4]" in message


def test_trace_fast_query_not_logged_at_warn(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=60.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.WARN)
    assert sql.config.log_level is LogLevel.WARN
    assert sql.config.slow_threshold == 60.0
    sql.trace(time.perf_counter(), lambda: ("select 3", 1), None)
    assert collector.logged() == []


def test_trace_info_logs_every_statement(collector):
    base = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    sql = base.log_mode(LogLevel.INFO)
    assert sql.config.log_level is LogLevel.INFO
    sql.trace(time.perf_counter(), lambda: ("select 4", 3), None)
    ((_, message),) = collector.logged()
    assert "[rows:3]" in message
    assert message.endswith("select 4")


def test_trace_silent_never_calls_fc(collector):
    calls = []

    def fc():
        calls.append(1)
        return "select 5", 1

    sql = SqlLogger(
        SqlLoggerConfig(slow_threshold=0.0, colorful=False, log_level=LogLevel.SILENT),
        _target(),
    )
    assert sql.config.log_level is LogLevel.SILENT
    sql.trace(time.perf_counter(), fc, RuntimeError("x"))
    assert calls == []
    assert collector.logged() == []

    louder = sql.log_mode(LogLevel.ERROR)
    assert louder.config.log_level is LogLevel.ERROR
    louder.trace(time.perf_counter(), fc, RuntimeError("x"))
    assert calls == [1]
    ((levelno, message),) = collector.logged()
    assert levelno == TRACE
    assert message.endswith("select 5")