"""
PocketCoordinator — the stateful orchestrator behind pocket mode.

Owns every piece of mutable pocket-mode state: the active mode, screen
state, sensor subscriptions, the latest channel values, the user override
and (through OverlayController) the overlay and its safety timer.

All state changes happen in handle(), which the event loop calls one event
at a time. Sensor callbacks and settings observers only post events.

Mode policies:
  - ALWAYS_ON        — no sensors; overlay follows screen-on.
  - STANDARD         — all sensors, always; standard rule set.
  - BATTERY_FRIENDLY — all sensors while the screen is on only;
                       battery-friendly rule set, keyguard required.
  - DISABLED         — no sensors, overlay kept hidden.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, FrozenSet, Optional, Sequence

from pocketmode.app.config import PocketConfig, default_config
from pocketmode.core.channel_state import SensorChannels, to_sample
from pocketmode.core.event_loop import PocketEventLoop
from pocketmode.core.gesture_manager import OverlayGestureManager
from pocketmode.core.overlay_controller import DISPLAY_OFF_TIMER, OverlayController
from pocketmode.core.pocket_detector import PocketDetector
from pocketmode.core.ports import Collaborators
from pocketmode.core.settings_reactor import SettingsReactor
from pocketmode.domain.enums import GestureEvent, HapticEffect, Mode, RuleSet, SensorChannel
from pocketmode.domain.models import (
    ChannelValues,
    LightSample,
    OverlayGesture,
    OverlayTouch,
    ProximitySample,
    ScreenOff,
    ScreenOn,
    SettingsChanged,
    TiltSample,
    TimerExpired,
)

logger = logging.getLogger(__name__)


class PocketCoordinator:
    """
    Parameters
    ----------
    collaborators : Collaborators
        Platform services, injected (allows testing with in-memory fakes).
    loop : PocketEventLoop
        The loop that delivers events to handle() and owns the timers.
    config : PocketConfig
    """

    def __init__(
        self,
        collaborators: Collaborators,
        loop: PocketEventLoop,
        config: PocketConfig = default_config,
    ) -> None:
        self._c = collaborators
        self._loop = loop
        self._cfg = config

        self._detector = PocketDetector(config)
        self._channels = SensorChannels(())
        self._overlay = OverlayController(collaborators, loop, config)
        self._settings = SettingsReactor(collaborators, loop.post, config)
        self._gestures = OverlayGestureManager(config)

        self._mode = Mode.DISABLED
        self._screen_on = True
        self._user_unlocked = False
        self._in_pocket = False
        self._in_bf_pocket = False
        self._subscribed: Dict[SensorChannel, int] = {}
        self._started = False

        self._handlers: Dict[type, Callable[[Any], None]] = {
            ProximitySample: self._on_sample,
            LightSample:     self._on_sample,
            TiltSample:      self._on_sample,
            ScreenOn:        self._on_screen_on,
            ScreenOff:       self._on_screen_off,
            SettingsChanged: self._on_settings_changed,
            OverlayTouch:    self._on_touch,
            OverlayGesture:  self._on_gesture,
            TimerExpired:    self._on_timer,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Probe sensor hardware, hook settings and apply the current mode."""
        if self._started:
            return
        available = [ch for ch in SensorChannel if self._c.sensors.has_sensor(ch)]
        missing = set(SensorChannel) - set(available)
        if missing:
            logger.warning(
                "Sensors not present, channels disabled: %s",
                ", ".join(sorted(ch.value for ch in missing)),
            )
        self._channels.set_available(available)

        self._started = True
        self._settings.observe()
        self._update_mode()
        logger.info(f"Pocket coordinator started (mode={self._mode.value})")

    def stop(self) -> None:
        if not self._started:
            return
        self._settings.close()
        self._started = False
        self._apply_subscriptions()
        self._forget_readings()
        self._overlay.hide()
        self._gestures.reset_all()
        logger.info("Pocket coordinator stopped")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def screen_on(self) -> bool:
        return self._screen_on

    @property
    def user_unlocked(self) -> bool:
        return self._user_unlocked

    @property
    def subscribed(self) -> FrozenSet[SensorChannel]:
        return frozenset(self._subscribed)

    @property
    def overlay(self) -> OverlayController:
        return self._overlay

    def channel_values(self) -> ChannelValues:
        return self._channels.snapshot()

    def is_overlay_showing(self) -> bool:
        return self._overlay.showing

    def is_in_pocket(self) -> bool:
        """Latest verdict of the active mode, masked by the user override."""
        if self._mode is Mode.STANDARD:
            return self._in_pocket and not self._user_unlocked
        if self._mode is Mode.BATTERY_FRIENDLY:
            return self._in_bf_pocket and not self._user_unlocked
        if self._mode is Mode.ALWAYS_ON:
            return self._overlay.showing
        return False

    # ------------------------------------------------------------------
    # Event entry point
    # ------------------------------------------------------------------
    def handle(self, event: Any) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.warning(f"Unknown event type: {type(event).__name__}")
            return
        handler(event)

    def on_raw_sample(self, channel: SensorChannel, values: Sequence[float], timestamp: float) -> None:
        """Sensor provider callback. Runs on the provider's thread: post only."""
        try:
            sample = to_sample(channel, values, timestamp)
        except (IndexError, TypeError, ValueError) as e:
            logger.debug(f"Malformed {channel.value} payload {values!r}: {e}")
            return
        self._loop.post(sample)

    # ------------------------------------------------------------------
    # Sensors
    # ------------------------------------------------------------------
    def _desired_subscriptions(self) -> Dict[SensorChannel, int]:
        if not self._started:
            return {}
        if self._mode is Mode.STANDARD:
            rate = self._cfg.standard_sensor_delay_us
        elif self._mode is Mode.BATTERY_FRIENDLY and self._screen_on:
            rate = self._cfg.battery_friendly_sensor_delay_us
        else:
            return {}
        return {ch: rate for ch in SensorChannel if ch in self._channels.available}

    def _apply_subscriptions(self) -> None:
        """Reconcile active subscriptions with what the mode wants right now."""
        desired = self._desired_subscriptions()

        for channel, rate in list(self._subscribed.items()):
            if desired.get(channel) != rate:
                self._c.sensors.unsubscribe(channel)
                del self._subscribed[channel]
                logger.debug(f"[SENSORS] {channel.value} unsubscribed")

        for channel, rate in desired.items():
            if channel not in self._subscribed:
                self._c.sensors.subscribe(channel, rate, self.on_raw_sample)
                self._subscribed[channel] = rate
                logger.debug(f"[SENSORS] {channel.value} subscribed @ {rate}us")

    def _on_sample(self, sample) -> None:
        if self._channels.apply(sample):
            self._evaluate()

    def _evaluate(self) -> None:
        """Run the detector for the active mode and gate the overlay on it."""
        mode = self._mode

        if mode is Mode.BATTERY_FRIENDLY:
            if not self._screen_on:
                self._apply_subscriptions()
                return
            values = self._channels.snapshot()
            self._log_predicates(values, RuleSet.BATTERY_FRIENDLY)
            self._in_bf_pocket = self._detector.evaluate_values(values, RuleSet.BATTERY_FRIENDLY)
            if (self._in_bf_pocket
                    and not self._user_unlocked
                    and self._overlay.on_keyguard()
                    and self._screen_on):
                self._overlay.show()
            else:
                self._overlay.hide()

        elif mode is Mode.STANDARD:
            values = self._channels.snapshot()
            self._log_predicates(values, RuleSet.STANDARD)
            self._in_pocket = self._detector.evaluate_values(values, RuleSet.STANDARD)
            if self._in_pocket and not self._user_unlocked:
                self._overlay.show()
            else:
                self._overlay.hide()

        elif mode is Mode.DISABLED:
            self._overlay.hide()

    def _log_predicates(self, values: ChannelValues, rule_set: RuleSet) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        p = self._detector.predicates(
            values.proximity, values.light, values.gravity, values.inclination, rule_set
        )
        logger.debug(
            f"[{rule_set.value}] prox={p.proximity} light={p.light} "
            f"gravity={p.gravity} inclination={p.inclination}"
        )

    # ------------------------------------------------------------------
    # Screen
    # ------------------------------------------------------------------
    def _on_screen_on(self, _event: ScreenOn) -> None:
        self._screen_on = True
        logger.info("[SCREEN] on")
        self._expire_dismissal()
        self._apply_subscriptions()

        # Light and accelerometer do not necessarily report on a screen
        # transition, so re-use the stored verdict.
        mode = self._mode
        if mode is Mode.ALWAYS_ON:
            in_pocket = True
        elif mode is Mode.STANDARD:
            in_pocket = self._in_pocket
        elif mode is Mode.BATTERY_FRIENDLY:
            in_pocket = self._in_bf_pocket
        else:
            self._overlay.hide()
            return

        if in_pocket and not self._user_unlocked:
            self._overlay.show()

    def _on_screen_off(self, _event: ScreenOff) -> None:
        self._screen_on = False
        logger.info("[SCREEN] off")
        self._expire_dismissal()
        self._apply_subscriptions()
        if self._mode in (Mode.BATTERY_FRIENDLY, Mode.DISABLED):
            self._overlay.hide()

    def _expire_dismissal(self) -> None:
        # Outside battery-friendly mode a dismissal lasts one screen session.
        if self._user_unlocked and self._mode is not Mode.BATTERY_FRIENDLY:
            self._user_unlocked = False
            logger.debug("[GESTURE] dismissal expired on screen transition")

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def _on_settings_changed(self, event: SettingsChanged) -> None:
        logger.debug(f"[SETTINGS] changed: {event.key}")
        self._update_mode()

    def _forget_readings(self) -> None:
        """Drop channel values and verdicts once sensors stop reporting."""
        self._channels.reset()
        self._in_pocket = False
        self._in_bf_pocket = False

    def _update_mode(self) -> None:
        previous = self._mode
        mode = self._settings.read_mode()

        if mode is not previous:
            logger.info(f"[MODE] {previous.value} → {mode.value}")
            self._user_unlocked = False
            if mode in (Mode.DISABLED, Mode.ALWAYS_ON):
                self._forget_readings()
            self._mode = mode

        self._apply_subscriptions()
        self._evaluate()

    # ------------------------------------------------------------------
    # Overlay gestures
    # ------------------------------------------------------------------
    def _on_touch(self, touch: OverlayTouch) -> None:
        if not self._overlay.showing:
            self._gestures.reset_all()
            return
        for gesture in self._gestures.process(touch):
            self._apply_gesture(gesture)

    def _on_gesture(self, event: OverlayGesture) -> None:
        self._apply_gesture(event.gesture)

    def _apply_gesture(self, gesture: GestureEvent) -> None:
        if not self._overlay.showing:
            logger.debug(f"[GESTURE] {gesture.value} ignored, overlay hidden")
            return

        if gesture is GestureEvent.LONG_PRESS:
            self._c.haptics.vibrate(HapticEffect.DOUBLE_CLICK)
            self._overlay.hide()
            self._user_unlocked = True
            logger.info("[GESTURE] long press: overlay dismissed by user")
        elif gesture is GestureEvent.DOUBLE_TAP:
            self._overlay.hide()
            self._overlay.sleep()
            logger.info("[GESTURE] double tap: display put to sleep")
        self._gestures.reset_all()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    def _on_timer(self, event: TimerExpired) -> None:
        if event.name == DISPLAY_OFF_TIMER:
            self._overlay.on_timer(event)
        else:
            logger.warning(f"Unknown timer: {event.name}")
