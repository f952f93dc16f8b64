"""
OverlayGestureDetector — contract for recognisers fed by the overlay's
pointer stream.

The overlay delivers one pointer at a time: a DOWN, any number of MOVEs,
then an UP (or a CANCEL when the system takes the pointer away). A detector
sees every event of that stream in order and reports a gesture on the event
that completes it, usually the UP. Timing comes from each event's own
timestamp; detectors never read a clock.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from pocketmode.domain.enums import GestureEvent
from pocketmode.domain.models import OverlayTouch


class OverlayGestureDetector(ABC):

    # Used by the manager's debug log
    NAME: str = "GESTURE"

    @abstractmethod
    def detect(self, touch: OverlayTouch) -> List[GestureEvent]:
        """Consume the next pointer event; non-empty only when a gesture just completed."""

    @abstractmethod
    def reset(self) -> None:
        """Forget the pointer history, e.g. once the overlay is removed."""
