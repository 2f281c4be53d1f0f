import threading

import pytest

from admincore.server.manager import Runnable, Server, ServerError


class _Service(Runnable):
    def __init__(self, name, allowed=True, error=None, blocking=True):
        self.name = name
        self.allowed = allowed
        self.error = error
        self.blocking = blocking
        self.calls = 0
        self.received = None

    def __str__(self):
        return self.name

    def start(self, stop):
        self.calls += 1
        self.received = stop
        if self.error is not None:
            raise self.error
        if self.blocking:
            stop.wait()

    def attempt(self):
        return self.allowed


def _stop_soon(delay=0.1):
    stop = threading.Event()
    timer = threading.Timer(delay, stop.set)
    timer.daemon = True
    timer.start()
    return stop


def test_start_returns_after_stop_and_stops_services():
    service = _Service("api")
    server = Server()
    server.add(service)
    server.start(_stop_soon())
    assert service.calls == 1
    assert service.received.is_set()


def test_service_failure_is_raised():
    server = Server()
    server.add(_Service("broken", error=RuntimeError("boom")))
    with pytest.raises(RuntimeError, match="boom"):
        server.start(threading.Event())


def test_refused_attempt_starts_nothing():
    good = _Service("good")
    refused = _Service("refused", allowed=False)
    server = Server()
    server.add(good, refused)
    with pytest.raises(ServerError, match="stop procedure is already engaged"):
        server.start(_stop_soon())
    assert good.calls == 0
    assert refused.calls == 0


def test_same_name_replaces_earlier_service():
    first = _Service("api")
    second = _Service("api")
    server = Server()
    server.add(first, second)
    server.start(_stop_soon())
    assert first.calls == 0
    assert second.calls == 1


def test_all_services_started():
    services = [_Service(name, blocking=False) for name in ("a", "b", "c")]
    server = Server()
    server.add(*services)
    stop = threading.Event()
    stop.set()
    server.start(stop)
    assert [service.calls for service in services] == [1, 1, 1]
    assert all(service.received.is_set() for service in services)


def test_services_get_their_own_stop_event():
    service = _Service("api", blocking=False)
    stop = threading.Event()
    stop.set()
    server = Server(graceful_shutdown_timeout=0)
    server.add(service)
    server.start(stop)
    assert service.received is not stop and service.received.is_set()