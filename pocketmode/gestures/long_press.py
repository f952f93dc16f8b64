"""
LongPressGesture — finger held still on the overlay, recognised on release.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from pocketmode.domain.enums import GestureEvent, TouchAction
from pocketmode.domain.models import OverlayTouch
from pocketmode.gestures.base import OverlayGestureDetector
from pocketmode.utils.geometry import dist


class LongPressGesture(OverlayGestureDetector):
    NAME = "LONG_PRESS"

    def __init__(self, long_press_ms: float = 500, slop_px: float = 16.0) -> None:
        self._hold_ms = long_press_ms
        self._slop = slop_px
        self._down: Optional[Tuple[float, float, float]] = None  # (t, x, y)

    def detect(self, touch: OverlayTouch) -> List[GestureEvent]:
        events: List[GestureEvent] = []

        if touch.action is TouchAction.DOWN:
            self._down = (touch.timestamp, touch.x, touch.y)
            return events

        if self._down is None:
            return events

        t0, x0, y0 = self._down
        if touch.action is TouchAction.MOVE:
            if dist((x0, y0), (touch.x, touch.y)) > self._slop:
                self.reset()
        elif touch.action is TouchAction.UP:
            if touch.timestamp - t0 >= self._hold_ms:
                events.append(GestureEvent.LONG_PRESS)
            self.reset()
        else:
            self.reset()

        return events

    def reset(self) -> None:
        self._down = None
