"""
PocketModeService — the one object a host constructs at process start.

Wires the event loop to the coordinator and exposes the public surface:
lifecycle, the two queries, and entry points that turn platform signals
into queued events. Nothing here is a global; the host keeps the instance
and hands it to whatever delivers screen and touch events.
"""
from __future__ import annotations
import logging
from typing import Optional

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.core.event_loop import Clock, PocketEventLoop, monotonic_ms
from pocketmode.core.pocket_coordinator import PocketCoordinator
from pocketmode.core.ports import Collaborators
from pocketmode.domain.enums import GestureEvent, TouchAction
from pocketmode.domain.models import OverlayGesture, OverlayTouch, ScreenOff, ScreenOn

logger = logging.getLogger(__name__)


class PocketModeService:
    """
    Usage
    -----
    service = PocketModeService(platform.collaborators())
    service.start()
    service.screen_on()
    service.run_pending()        # or hand service.loop to a PocketWorker
    service.is_in_pocket()
    """

    def __init__(
        self,
        collaborators: Collaborators,
        config: PocketConfig = default_config,
        clock: Clock = monotonic_ms,
    ) -> None:
        self._config = config
        self._loop = PocketEventLoop(clock=clock)
        self._coordinator = PocketCoordinator(collaborators, self._loop, config)
        self._loop.set_handler(self._coordinator.handle)

    # ------------------------------------------------------------------
    @property
    def loop(self) -> PocketEventLoop:
        return self._loop

    @property
    def coordinator(self) -> PocketCoordinator:
        return self._coordinator

    def start(self) -> None:
        self._coordinator.start()

    def stop(self) -> None:
        self._coordinator.stop()

    # ---- queries -------------------------------------------------------
    def is_in_pocket(self) -> bool:
        return self._coordinator.is_in_pocket()

    def is_overlay_showing(self) -> bool:
        return self._coordinator.is_overlay_showing()

    # ---- platform signals ---------------------------------------------
    def screen_on(self) -> None:
        self._loop.post(ScreenOn(self._loop.now()))

    def screen_off(self) -> None:
        self._loop.post(ScreenOff(self._loop.now()))

    def touch(self, action: TouchAction, x: float = 0.0, y: float = 0.0,
              timestamp: Optional[float] = None) -> None:
        ts = self._loop.now() if timestamp is None else timestamp
        self._loop.post(OverlayTouch(action, x, y, ts))

    def long_press(self) -> None:
        self._loop.post(OverlayGesture(GestureEvent.LONG_PRESS, self._loop.now()))

    def double_tap(self) -> None:
        self._loop.post(OverlayGesture(GestureEvent.DOUBLE_TAP, self._loop.now()))

    def run_pending(self) -> int:
        """Drain the queue on the calling thread (tests / single-threaded hosts)."""
        return self._loop.run_pending()
