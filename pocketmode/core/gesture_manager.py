"""
OverlayGestureManager — runs the overlay gesture detectors over each touch.

Design decisions:
  - Long press is checked first; a release that completes a long press is
    never also counted as a tap.
  - Detectors are reset together whenever the overlay goes away.
"""
from __future__ import annotations
import logging
from typing import List

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.domain.enums import GestureEvent
from pocketmode.domain.models import OverlayTouch
from pocketmode.gestures.double_tap import DoubleTapGesture
from pocketmode.gestures.long_press import LongPressGesture

logger = logging.getLogger(__name__)


class OverlayGestureManager:
    """
    Usage
    -----
    manager = OverlayGestureManager(config)
    events  = manager.process(touch)
    """

    def __init__(self, config: PocketConfig = default_config) -> None:
        self._long_press = LongPressGesture(config.long_press_ms, config.touch_slop_px)
        self._double_tap = DoubleTapGesture(
            config.double_tap_timeout_ms, config.long_press_ms, config.touch_slop_px
        )

    # ------------------------------------------------------------------
    def process(self, touch: OverlayTouch) -> List[GestureEvent]:
        long_press = self._long_press.detect(touch)
        if long_press:
            logger.debug(f"[GESTURE] {self._long_press.NAME} completed")
            self._double_tap.reset()
            return long_press
        double_tap = self._double_tap.detect(touch)
        if double_tap:
            logger.debug(f"[GESTURE] {self._double_tap.NAME} completed")
        return double_tap

    def reset_all(self) -> None:
        for gesture in (self._long_press, self._double_tap):
            gesture.reset()
