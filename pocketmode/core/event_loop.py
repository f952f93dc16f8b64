"""
PocketEventLoop — the single serialised inbound queue for the coordinator.

Producers (sensor callbacks, settings observers, screen broadcasts, touch
input) only ever call post(); the handler runs on whichever thread drives the
loop, one event at a time, in arrival order.

Timers live here too, so arming, cancelling and firing are ordered with
every other event: a timer comes due by being pushed onto the same queue.
"""
from __future__ import annotations
import heapq
import itertools
import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from pocketmode.domain.models import TimerExpired

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Handler = Callable[[Any], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class TimerHandle:
    id: int
    name: str
    due: float


class PocketEventLoop:
    """
    Parameters
    ----------
    handler : callable
        Receives every event. May be set later via set_handler().
    clock : callable
        Returns the current time in milliseconds. Injected so tests can
        drive time without sleeping.
    """

    def __init__(self, handler: Optional[Handler] = None, clock: Clock = monotonic_ms) -> None:
        self._handler = handler
        self._clock = clock
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._timers: List[Tuple[float, int, TimerHandle]] = []
        self._cancelled: set = set()
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def set_handler(self, handler: Handler) -> None:
        self._handler = handler

    def now(self) -> float:
        return self._clock()

    # ---- producers -----------------------------------------------------
    def post(self, event: Any) -> None:
        """Enqueue an event. Never blocks."""
        self._queue.put_nowait(event)

    # ---- timers --------------------------------------------------------
    def schedule(self, delay_ms: float, name: str) -> TimerHandle:
        """
        Arm a one-shot timer. When due, a TimerExpired carrying the handle id
        is delivered through the queue, unless cancel() ran first.
        """
        with self._lock:
            handle = TimerHandle(next(self._ids), name, self._clock() + delay_ms)
            heapq.heappush(self._timers, (handle.due, handle.id, handle))
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is None:
            return
        with self._lock:
            if any(h.id == handle.id for _, _, h in self._timers):
                self._cancelled.add(handle.id)

    def is_pending(self, handle: Optional[TimerHandle]) -> bool:
        if handle is None:
            return False
        with self._lock:
            return handle.id not in self._cancelled and any(
                h.id == handle.id for _, _, h in self._timers
            )

    def pending_timers(self) -> int:
        with self._lock:
            return sum(1 for _, _, h in self._timers if h.id not in self._cancelled)

    def _release_due_timers(self) -> None:
        now = self._clock()
        with self._lock:
            while self._timers and self._timers[0][0] <= now:
                _, _, handle = heapq.heappop(self._timers)
                if handle.id in self._cancelled:
                    self._cancelled.discard(handle.id)
                    continue
                self._queue.put_nowait(TimerExpired(handle.id, handle.name, now))

    def _next_timeout(self, default: float) -> float:
        """Seconds until the next live timer, capped at ``default``."""
        with self._lock:
            live = [due for due, _, h in self._timers if h.id not in self._cancelled]
        if not live:
            return default
        return max(0.0, min(default, (min(live) - self._clock()) / 1000.0))

    # ---- consumers -----------------------------------------------------
    def _dispatch(self, event: Any) -> None:
        if self._handler is None:
            logger.warning("No handler installed, dropping %s", type(event).__name__)
            return
        try:
            self._handler(event)
        except Exception as e:
            logger.error(f"Error handling {type(event).__name__}: {e}", exc_info=True)

    def run_pending(self) -> int:
        """
        Process every queued event and every timer that is already due,
        including events posted by the handler while draining.

        Returns the number of events dispatched.
        """
        count = 0
        while True:
            self._release_due_timers()
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return count
            self._dispatch(event)
            count += 1

    def run_forever(self, stop_event: threading.Event, idle_timeout: float = 0.1) -> None:
        """Blocking loop for a dedicated thread. Returns once stop_event is set."""
        logger.info("Event loop started")
        while not stop_event.is_set():
            self._release_due_timers()
            try:
                event = self._queue.get(timeout=self._next_timeout(idle_timeout))
            except queue.Empty:
                continue
            self._dispatch(event)
        logger.info("Event loop stopped")
