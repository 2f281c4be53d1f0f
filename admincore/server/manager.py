"""Runs a set of named services together and stops them as one."""

from __future__ import annotations

import logging
import queue
import threading
import time
from abc import ABC, abstractmethod

_log = logging.getLogger(__name__)

DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT = 5.0
_POLL_INTERVAL = 0.05


class Runnable(ABC):
    """A service the :class:`Server` can start; its name is ``str(self)``."""

    @abstractmethod
    def start(self, stop: threading.Event) -> None:
        """Run the service; ``stop`` is set when it should finish. Raise on failure."""

    @abstractmethod
    def attempt(self) -> bool:
        """Whether the service may still be started."""


class ServerError(Exception):
    """Raised when the server cannot start or stop its services."""


def _link(stop: threading.Event, internal: threading.Event) -> None:
    while not internal.is_set():
        if stop.wait(_POLL_INTERVAL):
            internal.set()


class Server:
    """Starts every added service in its own thread and waits for them."""

    def __init__(
        self, graceful_shutdown_timeout: float = DEFAULT_GRACEFUL_SHUTDOWN_TIMEOUT
    ) -> None:
        self.graceful_shutdown_timeout = graceful_shutdown_timeout
        self._services: dict[str, Runnable] = {}
        self._lock = threading.Lock()

    def add(self, *args: Runnable) -> None:
        """Add services; a later service replaces an earlier one of the same name."""
        for runnable in args:
            self._services[str(runnable)] = runnable

    def start(self, stop: threading.Event) -> None:
        """Run all services until ``stop`` is set; re-raise a service's failure."""
        with self._lock:
            internal = threading.Event()
            errors: queue.Queue[Exception] = queue.Queue()
            threads: list[threading.Thread] = []
            failure: Exception | None = None
            try:
                self._run(stop, internal, errors, threads)
            except Exception as exc:
                failure = exc
            stop_error = self._engage_stop(internal, errors, threads)
        if stop_error is not None:
            if failure is not None:
                raise ServerError(f"{stop_error}, {failure}") from failure
            raise stop_error
        if failure is not None:
            raise failure

    def _run(
        self,
        stop: threading.Event,
        internal: threading.Event,
        errors: queue.Queue[Exception],
        threads: list[threading.Thread],
    ) -> None:
        services = list(self._services.values())
        if not all(runnable.attempt() for runnable in services):
            raise ServerError(
                "can't accept new runnable as stop procedure is already engaged"
            )
        threading.Thread(target=_link, args=(stop, internal), daemon=True).start()
        for runnable in services:
            thread = threading.Thread(
                target=self._run_one,
                args=(runnable, internal, errors),
                name=str(runnable),
                daemon=True,
            )
            threads.append(thread)
            thread.start()
        for thread in threads:
            thread.join()
        while not stop.is_set():
            try:
                error = errors.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            raise error

    @staticmethod
    def _run_one(
        runnable: Runnable, stop: threading.Event, errors: queue.Queue[Exception]
    ) -> None:
        try:
            runnable.start(stop)
        except Exception as exc:
            errors.put(exc)

    def _engage_stop(
        self,
        internal: threading.Event,
        errors: queue.Queue[Exception],
        threads: list[threading.Thread],
    ) -> ServerError | None:
        internal.set()
        try:
            if self.graceful_shutdown_timeout == 0:
                return None
            timeout = (
                self.graceful_shutdown_timeout
                if self.graceful_shutdown_timeout > 0
                else None
            )
            deadline = None if timeout is None else time.monotonic() + timeout
            for thread in threads:
                remaining = (
                    None if deadline is None else max(0.0, deadline - time.monotonic())
                )
                thread.join(remaining)
            if any(thread.is_alive() for thread in threads):
                return ServerError(
                    "failed waiting for all runnables to end within grace period "
                    f"of {timeout}s: deadline exceeded"
                )
            return None
        finally:
            while True:
                try:
                    late = errors.get_nowait()
                except queue.Empty:
                    break
                _log.error("error received after stop sequence was engaged: %s", late)