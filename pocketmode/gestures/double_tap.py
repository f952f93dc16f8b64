"""
DoubleTapGesture — two quick taps on the overlay.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from pocketmode.domain.enums import GestureEvent, TouchAction
from pocketmode.domain.models import OverlayTouch
from pocketmode.gestures.base import OverlayGestureDetector
from pocketmode.utils.geometry import dist


class DoubleTapGesture(OverlayGestureDetector):
    NAME = "DOUBLE_TAP"

    def __init__(
        self,
        timeout_ms: float = 300,
        tap_max_ms: float = 500,
        slop_px: float = 16.0,
    ) -> None:
        self._timeout = timeout_ms
        self._tap_max = tap_max_ms
        self._slop = slop_px
        self._down: Optional[Tuple[float, float, float]] = None
        self._last_tap_up: Optional[float] = None
        self._second = False

    def detect(self, touch: OverlayTouch) -> List[GestureEvent]:
        events: List[GestureEvent] = []
        action = touch.action

        if action is TouchAction.DOWN:
            self._second = (
                self._last_tap_up is not None
                and touch.timestamp - self._last_tap_up <= self._timeout
            )
            if not self._second:
                self._last_tap_up = None
            self._down = (touch.timestamp, touch.x, touch.y)

        elif action is TouchAction.MOVE:
            if self._down is not None:
                _, x0, y0 = self._down
                if dist((x0, y0), (touch.x, touch.y)) > self._slop:
                    self.reset()

        elif action is TouchAction.UP:
            if self._down is None:
                return events
            t0, _, _ = self._down
            self._down = None
            if touch.timestamp - t0 > self._tap_max:
                self.reset()
            elif self._second:
                events.append(GestureEvent.DOUBLE_TAP)
                self.reset()
            else:
                self._last_tap_up = touch.timestamp

        else:
            self.reset()

        return events

    def reset(self) -> None:
        self._down = None
        self._last_tap_up = None
        self._second = False
