from enum import Enum


class Mode(str, Enum):
    """Mutually exclusive pocket-mode policies, derived from settings."""
    DISABLED         = "DISABLED"
    STANDARD         = "STANDARD"
    ALWAYS_ON        = "ALWAYS_ON"
    BATTERY_FRIENDLY = "BATTERY_FRIENDLY"


class SensorChannel(str, Enum):
    """Logical sensor channels the coordinator subscribes to."""
    PROXIMITY     = "PROXIMITY"
    LIGHT         = "LIGHT"
    ACCELEROMETER = "ACCELEROMETER"


class RuleSet(str, Enum):
    """Verdict policies understood by the pocket detector."""
    STANDARD         = "STANDARD"
    BATTERY_FRIENDLY = "BATTERY_FRIENDLY"


class TouchAction(str, Enum):
    """Pointer actions reported by the overlay surface."""
    DOWN   = "DOWN"
    MOVE   = "MOVE"
    UP     = "UP"
    CANCEL = "CANCEL"


class GestureEvent(str, Enum):
    """Events emitted by overlay gesture detectors."""
    LONG_PRESS = "LONG_PRESS"
    DOUBLE_TAP = "DOUBLE_TAP"


class HapticEffect(str, Enum):
    """Predefined vibration effects."""
    DOUBLE_CLICK = "DOUBLE_CLICK"
