from pocketmode.core.pocket_detector import PocketDetector
from pocketmode.core.channel_state import SensorChannels
from pocketmode.core.event_loop import PocketEventLoop, TimerHandle
from pocketmode.core.overlay_controller import OverlayController
from pocketmode.core.settings_reactor import SettingsReactor, resolve_mode
from pocketmode.core.gesture_manager import OverlayGestureManager
from pocketmode.core.pocket_coordinator import PocketCoordinator

__all__ = [
    "PocketDetector",
    "SensorChannels",
    "PocketEventLoop",
    "TimerHandle",
    "OverlayController",
    "SettingsReactor",
    "resolve_mode",
    "OverlayGestureManager",
    "PocketCoordinator",
]
