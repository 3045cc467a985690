"""Background producer of key, mouse, and tick events.

A daemon thread decodes stdin into key tokens and feeds a bounded queue.
The main loop consumes one event at a time; it is the only place the loop
waits. Key and mouse events are never dropped, ticks are.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Full, Queue

from .input import read_key

EVENT_QUEUE_CAPACITY = 16
TICK_SECONDS = 0.25
POLL_TIMEOUT_MS = 50
PUT_RETRY_SECONDS = 0.05


@dataclass(frozen=True)
class Event:
    """One input occurrence: ``kind`` is ``key``, ``mouse`` or ``tick``."""

    kind: str
    key: str = ""


TICK = Event("tick")


def event_for_key(key: str) -> Event:
    if key.startswith("MOUSE"):
        return Event("mouse", key)
    return Event("key", key)


class EventSource:
    """Thread-backed event producer with an explicit start/stop lifecycle."""

    def __init__(
        self,
        stdin_fd: int,
        *,
        tick_seconds: float = TICK_SECONDS,
        capacity: int = EVENT_QUEUE_CAPACITY,
        read_key_fn: Callable[..., str] = read_key,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.tick_seconds = tick_seconds
        self._read_key = read_key_fn
        self._queue: Queue[Event] = Queue(maxsize=max(1, capacity))
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._error: BaseException | None = None
        self._skip_next_lf = False

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._worker,
            name="chopsticks-event-source",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop producing and wait until stdin is no longer being read."""
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _put_blocking(self, event: Event) -> None:
        while not self._stop.is_set():
            try:
                self._queue.put(event, timeout=PUT_RETRY_SECONDS)
                return
            except Full:
                continue

    def _put_tick(self) -> None:
        try:
            self._queue.put_nowait(TICK)
        except Full:
            pass

    def _normalize_enter(self, key: str) -> str | None:
        """Collapse CR, LF, and CR LF into a single ``ENTER`` token."""
        if key == "ENTER_LF" and self._skip_next_lf:
            self._skip_next_lf = False
            return None
        self._skip_next_lf = key == "ENTER_CR"
        if key in {"ENTER_CR", "ENTER_LF"}:
            return "ENTER"
        return key

    def _worker(self) -> None:
        next_tick = time.monotonic() + self.tick_seconds
        try:
            while not self._stop.is_set():
                key = self._read_key(self.stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
                if key:
                    normalized = self._normalize_enter(key)
                    if normalized is not None:
                        self._put_blocking(event_for_key(normalized))
                now = time.monotonic()
                if now >= next_tick:
                    self._put_tick()
                    next_tick = now + self.tick_seconds
        except Exception as exc:
            self._error = exc

    def next(self, timeout: float | None = None) -> Event | None:
        """Wait for the next event.

        Returns ``None`` when ``timeout`` elapses or once the source has been
        stopped and drained. An exception raised by the producer thread is
        re-raised here.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            try:
                return self._queue.get(timeout=PUT_RETRY_SECONDS)
            except Empty:
                pass
            if self._error is not None:
                error, self._error = self._error, None
                raise error
            if self._stop.is_set() or (self._thread is not None and not self._thread.is_alive()):
                return None
            if deadline is not None and time.monotonic() >= deadline:
                return None
