from __future__ import annotations
from dataclasses import dataclass

from pocketmode.utils import constants as C


@dataclass
class PocketConfig:
    """
    Central configuration injected into all components.
    Defaults mirror the values shipped on device.
    """
    # ---- detector thresholds -------------------------------------------
    proximity_threshold: float = C.PROXIMITY_THRESHOLD
    light_threshold: float = C.LIGHT_THRESHOLD
    gravity_threshold: float = C.GRAVITY_THRESHOLD
    min_inclination: int = C.MIN_INCLINATION
    max_inclination: int = C.MAX_INCLINATION

    # ---- overlay -------------------------------------------------------
    display_off_delay_ms: int = C.DISPLAY_OFF_DELAY_MS

    # ---- sensor sampling (µs) -----------------------------------------
    standard_sensor_delay_us: int = C.STANDARD_SENSOR_DELAY_US
    battery_friendly_sensor_delay_us: int = C.BATTERY_FRIENDLY_SENSOR_DELAY_US

    # ---- overlay gestures ---------------------------------------------
    long_press_ms: int = C.LONG_PRESS_MS
    double_tap_timeout_ms: int = C.DOUBLE_TAP_TIMEOUT_MS
    touch_slop_px: float = C.TOUCH_SLOP_PX

    # ---- settings keys ------------------------------------------------
    standard_key: str = C.POCKET_MODE_ENABLED
    always_on_key: str = C.ALWAYS_ON_POCKET_MODE_ENABLED
    battery_friendly_key: str = C.BATTERY_FRIENDLY_POCKET_MODE_ENABLED

    # ---- broadcast ----------------------------------------------------
    broadcast_action: str = C.ACTION_POCKET_STATE_CHANGED
    broadcast_target: str = C.POCKET_STATE_LISTENER
    broadcast_extra: str = C.EXTRA_IN_POCKET

    # ---- logging ------------------------------------------------------
    log_level: str = "INFO"

    @property
    def setting_keys(self) -> tuple:
        return (self.standard_key, self.always_on_key, self.battery_friendly_key)


# Shared default; tests build their own PocketConfig.
default_config = PocketConfig()
