"""In-process message queue with per-stream consumers."""

from __future__ import annotations

import logging
import queue
import threading
import time
import uuid

from admincore.storage.message import ConsumerFunc, Message

_log = logging.getLogger(__name__)

_MAX_RETRIES = 3
_RETRY_DELAY = 1.0


class MemoryQueue:
    """Streams held in memory; failed messages are retried up to three times."""

    def __init__(self, pool_num: int) -> None:
        self.pool_num = pool_num
        self._queues: dict[str, queue.Queue[Message]] = {}
        self._lock = threading.Lock()
        self._stopped = threading.Event()

    def __str__(self) -> str:
        return "memory"

    def _queue_for(self, name: str) -> queue.Queue[Message]:
        with self._lock:
            stream = self._queues.get(name)
            if stream is None:
                stream = queue.Queue(maxsize=max(self.pool_num, 0))
                self._queues[name] = stream
            return stream

    def append(self, message: Message) -> None:
        """Enqueue a copy of ``message`` under a fresh identifier; never blocks."""
        copy = Message(
            id=str(uuid.uuid4()),
            stream=message.stream,
            values=message.values,
        )
        stream = self._queue_for(message.stream)
        try:
            stream.put_nowait(copy)
        except queue.Full:
            threading.Thread(target=stream.put, args=(copy,), daemon=True).start()

    def register(self, name: str, func: ConsumerFunc) -> None:
        """Start a consumer that feeds each message of stream ``name`` to ``func``."""
        stream = self._queue_for(name)
        threading.Thread(
            target=self._consume,
            args=(stream, func),
            name=f"consumer-{name}",
            daemon=True,
        ).start()

    @staticmethod
    def _consume(stream: queue.Queue[Message], func: ConsumerFunc) -> None:
        while True:
            message = stream.get()
            try:
                func(message)
            except Exception:
                _log.debug("consumer failed on message %s", message.id, exc_info=True)
                if message.error_count < _MAX_RETRIES:
                    message.error_count += 1
                    time.sleep(_RETRY_DELAY * message.error_count)
                    stream.put(message)

    def run(self) -> None:
        """Block until :meth:`shutdown` is called."""
        self._stopped.wait()

    def shutdown(self) -> None:
        self._stopped.set()