"""HTTP listener services, including health and readiness endpoints."""

from __future__ import annotations

import logging
import ssl
import threading
from socketserver import ThreadingMixIn
from typing import Any, Callable, Iterable
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from admincore.server.manager import Runnable

_log = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]
Hook = Callable[[], None]


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        _log.debug(format, *args)


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def _ok(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
    start_response("200 OK", [("Content-Length", "0")])
    return [b""]


def _route(path: str) -> WSGIApp:
    def app(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("PATH_INFO") == path:
            return _ok(environ, start_response)
        body = b"404 page not found\n"
        start_response(
            "404 Not Found",
            [("Content-Type", "text/plain; charset=utf-8"), ("Content-Length", str(len(body)))],
        )
        return [body]

    return app


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"address {addr!r} has no port")
    return host.strip("[]"), int(port or 0)


class Listener(Runnable):
    """An HTTP server serving a WSGI application until its stop event is set."""

    def __init__(
        self,
        name: str,
        addr: str = ":8080",
        handler: WSGIApp | None = None,
        cert_file: str = "",
        key_file: str = "",
        started_hook: Hook | None = None,
        end_hook: Hook | None = None,
    ) -> None:
        self.name = name
        self.addr = addr
        self.handler = handler or _ok
        self.cert_file = cert_file
        self.key_file = key_file
        self.started_hook = started_hook
        self.end_hook = end_hook
        self._server: _ThreadingWSGIServer | None = None
        self._started = False
        self._closed = False
        self._lock = threading.Lock()

    def __str__(self) -> str:
        return self.name

    @property
    def address(self) -> str:
        """The bound ``host:port`` once started, the configured address before."""
        if self._server is None:
            return self.addr
        host, port = self._server.server_address[:2]
        return f"{host}:{port}"

    def start(self, stop: threading.Event) -> None:
        """Bind, serve in the background and return; shut down once ``stop`` is set."""
        host, port = _split_addr(self.addr)
        server = make_server(
            host,
            port,
            self.handler,
            server_class=_ThreadingWSGIServer,
            handler_class=_QuietHandler,
        )
        if self.cert_file and self.key_file:
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
            context.load_cert_chain(self.cert_file, self.key_file)
            server.socket = context.wrap_socket(server.socket, server_side=True)
        self._server = server
        self._started = True
        _log.info("%s Server listening on %s", self.name, self.address)
        threading.Thread(target=self._serve, args=(server,), daemon=True).start()
        threading.Thread(target=self._watch, args=(stop,), daemon=True).start()
        if self.started_hook is not None:
            self.started_hook()

    def _serve(self, server: _ThreadingWSGIServer) -> None:
        try:
            server.serve_forever(poll_interval=0.1)
        except Exception:
            _log.exception("%s Server start error", self.name)

    def _watch(self, stop: threading.Event) -> None:
        stop.wait()
        try:
            self.shutdown()
        except Exception:
            _log.exception("%s Server shutdown error", self.name)

    def attempt(self) -> bool:
        return not self._started

    def shutdown(self) -> None:
        """Stop serving, close the socket and run the end hook once."""
        with self._lock:
            if self._server is None:
                raise RuntimeError(f"{self.name} Server was never started")
            if self._closed:
                return
            self._closed = True
        self._server.shutdown()
        self._server.server_close()
        if self.end_hook is not None:
            self.end_hook()


def new_healthz(**kwargs: Any) -> Listener:
    """A listener answering 200 on ``/healthz``, on ``:4000`` by default."""
    kwargs.setdefault("addr", ":4000")
    kwargs.setdefault("handler", _route("/healthz"))
    return Listener("healthz", **kwargs)


def new_readyz(**kwargs: Any) -> Listener:
    """A listener answering 200 on ``/readyz``, on ``:2000`` by default."""
    kwargs.setdefault("addr", ":2000")
    kwargs.setdefault("handler", _route("/readyz"))
    return Listener("readyz", **kwargs)