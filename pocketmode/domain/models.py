from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import time

from pocketmode.domain.enums import GestureEvent, TouchAction

# Type aliases
Vector3 = Tuple[float, float, float]
Extras = Dict[str, Any]


def _now_ms() -> float:
    return time.monotonic() * 1000.0


# ---- sensor samples -------------------------------------------------------
@dataclass(frozen=True)
class ProximitySample:
    distance: float
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class LightSample:
    illuminance: float
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class TiltSample:
    """Raw 3-axis acceleration; gravity and inclination are derived from it."""
    values: Vector3
    timestamp: float = field(default_factory=_now_ms)


# ---- lifecycle / external signals ----------------------------------------
@dataclass(frozen=True)
class ScreenOn:
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class ScreenOff:
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class SettingsChanged:
    key: Optional[str] = None
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class OverlayTouch:
    action: TouchAction
    x: float = 0.0
    y: float = 0.0
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class OverlayGesture:
    gesture: GestureEvent
    timestamp: float = field(default_factory=_now_ms)


@dataclass(frozen=True)
class TimerExpired:
    """Delivered by the event loop when a scheduled timer comes due."""
    handle_id: int
    name: str
    timestamp: float = field(default_factory=_now_ms)


# ---- coordinator-side values ---------------------------------------------
@dataclass
class ChannelValues:
    """
    Latest value per channel. ``None`` means the channel is unknown:
    no sample yet, or the hardware is missing.
    """
    proximity: Optional[float] = None
    light: Optional[float] = None
    gravity: Optional[Vector3] = None
    inclination: Optional[int] = None


@dataclass(frozen=True)
class OverlayLayout:
    """Window parameters handed to the overlay surface when it is shown."""
    full_screen: bool = True
    show_when_locked: bool = True
    focusable: bool = False
    immersive: bool = True
    cutout_mode: str = "SHORT_EDGES"
    background_argb: Tuple[int, int, int, int] = (224, 0, 0, 0)
